from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .vendor_model import Vendor


class VendorRepository(Protocol):
    def get_by_id(self, vendor_id: int) -> Optional[Vendor]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Vendor]:
        raise NotImplementedError

    def create(self, vendor: Vendor) -> Vendor:
        raise NotImplementedError

    def update(self, vendor: Vendor) -> bool:
        raise NotImplementedError

    def delete(self, vendor_id: int) -> bool:
        raise NotImplementedError
