from typing import Optional

from pydantic import ValidationError as ModelValidationError

from app.Core.Exceptions.errors import StorageError
from app.Domains.Settings.Models.settings import OfficeSettings
from app.Domains.Settings.Repositories.settings_repository import SettingsRepository
from app.Infrastructure.Storage.json_store import JsonCollectionStore

SETTINGS_KEY = "settings"


class JsonSettingsRepository(SettingsRepository):
    def __init__(self, store: JsonCollectionStore, key: str = SETTINGS_KEY):
        self.store = store
        self.key = key

    def get(self) -> Optional[OfficeSettings]:
        items = self.store.load(self.key)
        if not items:
            return None
        try:
            return OfficeSettings(**items[0])
        except (ModelValidationError, TypeError) as e:
            raise StorageError(f"Collection '{self.key}' holds malformed settings", {"key": self.key}) from e

    def save(self, settings: OfficeSettings) -> OfficeSettings:
        self.store.save(self.key, [settings.model_dump(mode="json")])
        return settings


class InMemorySettingsRepository(SettingsRepository):
    def __init__(self, settings: Optional[OfficeSettings] = None):
        self._settings = settings

    def get(self) -> Optional[OfficeSettings]:
        return self._settings.model_copy() if self._settings else None

    def save(self, settings: OfficeSettings) -> OfficeSettings:
        self._settings = settings.model_copy()
        return settings
