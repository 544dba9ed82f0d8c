from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Payment, PaymentFilter


class PaymentRepository(Protocol):
    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

    def list(self, flt: PaymentFilter, *, limit: Optional[int] = None) -> Sequence[Payment]:
        raise NotImplementedError

    def create(self, payment: Payment) -> Payment:
        raise NotImplementedError

    def update(self, payment: Payment) -> bool:
        raise NotImplementedError

    def delete(self, payment_id: int) -> bool:
        raise NotImplementedError
