from __future__ import annotations

import logging
from typing import Dict, Optional

from ..common.validators import require_int_in_range, require_non_empty
from ..core.constants import DAILY_FEE_DESCRIPTION, DAILY_FEE_KEY, DEFAULT_DAILY_FEE, MAX_DAILY_FEE
from ..core.exceptions import InvalidInputError
from .model import AppSetting
from .repository import SettingRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Use case: read and change application settings (daily fee)."""

    def __init__(self, settings: SettingRepository, *, default_daily_fee: int = DEFAULT_DAILY_FEE):
        self._settings = settings
        self._default_daily_fee = int(default_daily_fee)

    @property
    def default_daily_fee(self) -> int:
        return self._default_daily_fee

    def get_all(self) -> Dict[str, str]:
        return {s.key: s.value for s in sorted(self._settings.list_all(), key=lambda s: s.key)}

    def get_daily_fee(self) -> int:
        setting = self._settings.get(DAILY_FEE_KEY)
        if not setting:
            return self._default_daily_fee

        try:
            return int(setting.value.strip())
        except (AttributeError, ValueError):
            logger.warning(
                "Setting %s has non-numeric value %r, using default %s",
                DAILY_FEE_KEY,
                setting.value,
                self._default_daily_fee,
            )
            return self._default_daily_fee

    def update_daily_fee(self, amount) -> int:
        fee = require_int_in_range(amount, "Daily fee", min_value=1, max_value=MAX_DAILY_FEE)
        self._settings.upsert(key=DAILY_FEE_KEY, value=str(fee), description=DAILY_FEE_DESCRIPTION)
        logger.info("Daily fee updated to %s", fee)
        return fee

    def reset_daily_fee(self) -> int:
        return self.update_daily_fee(self._default_daily_fee)

    def update_setting(self, key, value, description: Optional[str] = None) -> AppSetting:
        key = require_non_empty(key, "Key")
        if value is None:
            raise InvalidInputError("Key and value are required")

        if key == DAILY_FEE_KEY:
            value = require_int_in_range(value, "Daily fee", min_value=1, max_value=MAX_DAILY_FEE)

        setting = self._settings.upsert(key=key, value=str(value), description=description or None)
        logger.info("Setting %s updated", key)
        return setting
