from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Driver:
    """Domain entity: a delivery driver."""

    driver_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
