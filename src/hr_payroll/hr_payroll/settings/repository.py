from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Setting


class SettingsRepository(Protocol):
    def get(self, key: str) -> Optional[Setting]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Setting]:
        raise NotImplementedError

    def upsert(self, *, key: str, value: str) -> tuple[Setting, bool]:
        """Create or update one setting; returns (setting, created)."""

        raise NotImplementedError
