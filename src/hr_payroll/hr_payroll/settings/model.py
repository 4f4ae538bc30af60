from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Setting:
    key: str
    value: Optional[str]
    updated_at: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {"setting_key": self.key, "setting_value": self.value, "updated_at": self.updated_at}
