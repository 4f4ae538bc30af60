"""Configuration provider for payroll business rules.

Values are read from the settings table on every call, so a later change
(e.g. a new TDS percentage) affects the next calculation without a restart.
"""
from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Protocol

from .repository import SettingsRepository

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[+-]?\d+$")


def parse_setting_value(raw: Optional[str]) -> Any:
    """Numbers become int/Decimal; anything else is returned as-is."""
    if raw is None:
        raise ValueError("empty setting value")
    text = str(raw).strip()
    if not text:
        raise ValueError("empty setting value")
    if _INT_RE.match(text):
        return int(text)
    try:
        number = Decimal(text)
    except InvalidOperation:
        return raw
    if not number.is_finite():
        return raw
    return number


class ConfigProvider(Protocol):
    def get(self, key: str, default: Any) -> Any:
        raise NotImplementedError


class SettingsConfigProvider(ConfigProvider):
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get(self, key: str, default: Any) -> Any:
        try:
            setting = self._settings.get(key)
        except Exception:
            logger.exception("Reading setting %r failed, using default %r", key, default)
            return default
        if setting is None:
            return default
        try:
            return parse_setting_value(setting.value)
        except ValueError:
            logger.warning("Setting %r has no usable value, using default %r", key, default)
            return default


class StaticConfigProvider(ConfigProvider):
    """Fixed values; handy for scripts and deterministic tests."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)
