from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Vendor:
    """Domain entity: a supplier that expenses are raised against."""

    vendor_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
