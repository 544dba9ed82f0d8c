from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import DeliveryFilter, DeliveryRecord


class DeliveryRepository(Protocol):
    def get_by_id(self, delivery_id: int) -> Optional[DeliveryRecord]:
        raise NotImplementedError

    def list(self, flt: DeliveryFilter, *, limit: Optional[int] = None) -> Sequence[DeliveryRecord]:
        raise NotImplementedError

    def create(self, record: DeliveryRecord) -> DeliveryRecord:
        raise NotImplementedError

    def update(self, record: DeliveryRecord) -> bool:
        raise NotImplementedError

    def delete(self, delivery_id: int) -> bool:
        raise NotImplementedError
