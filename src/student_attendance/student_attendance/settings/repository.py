from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AppSetting


class SettingRepository(Protocol):
    def get(self, key: str) -> Optional[AppSetting]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AppSetting]:
        raise NotImplementedError

    def upsert(self, *, key: str, value: str, description: Optional[str] = None) -> AppSetting:
        """Create on first write, update afterwards.

        A missing description keeps the stored one.
        """

        raise NotImplementedError
