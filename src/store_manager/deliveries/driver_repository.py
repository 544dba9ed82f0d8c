from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .driver_model import Driver


class DriverRepository(Protocol):
    def get_by_id(self, driver_id: int) -> Optional[Driver]:
        raise NotImplementedError

    def list_all(self, *, store_id: Optional[int] = None) -> Sequence[Driver]:
        raise NotImplementedError

    def create(self, driver: Driver) -> Driver:
        raise NotImplementedError

    def update(self, driver: Driver) -> bool:
        raise NotImplementedError

    def delete(self, driver_id: int) -> bool:
        raise NotImplementedError
