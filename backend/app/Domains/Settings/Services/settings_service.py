from typing import Optional

from loguru import logger

from app.Core.Exceptions.errors import Forbidden, ValidationError
from app.Domains.Session.Models.session import SessionContext, actor_label
from app.Domains.Settings.Models.settings import OfficeSettings
from app.Domains.Settings.Repositories.settings_repository import SettingsRepository


class SettingsService:
    def __init__(self, repository: SettingsRepository, default_daily_limit: int = 20):
        self.repository = repository
        self.default_daily_limit = default_daily_limit

    def get_settings(self) -> OfficeSettings:
        settings = self.repository.get()
        if settings is None:
            settings = self.repository.save(OfficeSettings(daily_limit=self.default_daily_limit))
        return settings

    def daily_limit(self) -> int:
        return self.get_settings().daily_limit

    def update_daily_limit(
        self, daily_limit: int, actor: Optional[SessionContext] = None
    ) -> OfficeSettings:
        if actor is not None and not actor.is_admin:
            raise Forbidden("Only administrators can change the daily limit", {"user_id": actor.user_id})
        if daily_limit < 0:
            raise ValidationError("daily_limit must be zero or greater", {"daily_limit": daily_limit})
        settings = self.get_settings()
        settings.daily_limit = daily_limit
        self.repository.save(settings)
        logger.info(f"Daily limit set to {daily_limit} by {actor_label(actor)}")
        return settings
