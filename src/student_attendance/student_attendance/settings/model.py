from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AppSetting:
    """Thực thể miền (domain): Cấu hình dạng key-value (giá trị lưu dạng chuỗi)."""

    key: str
    value: str
    description: Optional[str] = None
