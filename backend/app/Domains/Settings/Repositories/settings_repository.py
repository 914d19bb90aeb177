from abc import ABC, abstractmethod
from typing import Optional

from app.Domains.Settings.Models.settings import OfficeSettings


class SettingsRepository(ABC):
    @abstractmethod
    def get(self) -> Optional[OfficeSettings]:
        pass

    @abstractmethod
    def save(self, settings: OfficeSettings) -> OfficeSettings:
        pass
