from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from .model import Setting
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def list_settings(self) -> Sequence[Setting]:
        return self._settings.list_all()

    def get_setting(self, key: str) -> Setting:
        setting = self._settings.get(key)
        if setting is None:
            raise NotFoundError("Setting not found")
        return setting

    def update_setting(self, *, key: str, value: Any) -> tuple[Setting, bool]:
        key = (key or "").strip()
        if not key:
            raise ValidationError("Setting key is required")
        if value is None or str(value).strip() == "":
            raise ValidationError("Value is required")
        setting, created = self._settings.upsert(key=key, value=str(value).strip())
        logger.info("Setting %s %s to %r", key, "created" if created else "updated", setting.value)
        return setting, created

    def update_settings(self, items: Optional[Iterable[Any]]) -> list[Setting]:
        """Bulk update; entries without a key are skipped."""
        if not isinstance(items, list):
            raise ValidationError("Settings must be an array")

        results: list[Setting] = []
        for item in items:
            if not isinstance(item, dict) or not (item.get("key") or "").strip():
                continue
            value = item.get("value")
            setting, _ = self._settings.upsert(key=item["key"].strip(), value="" if value is None else str(value))
            results.append(setting)
        logger.info("Bulk settings update applied to %d keys", len(results))
        return results
