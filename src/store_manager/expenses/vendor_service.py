from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ..common.validators import merge_partial, optional_text, require_non_empty
from ..core.exceptions import NotFoundError
from .vendor_model import Vendor
from .vendor_repository import VendorRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VendorInput:
    name: Any = None
    email: Any = None
    phone: Any = None

    @classmethod
    def from_record(cls, vendor: Vendor) -> VendorInput:
        return cls(name=vendor.name, email=vendor.email, phone=vendor.phone)


class VendorService:
    def __init__(self, vendors: VendorRepository):
        self._vendors = vendors

    def _build(self, vendor_id: int, data: VendorInput) -> Vendor:
        return Vendor(
            vendor_id=vendor_id,
            name=require_non_empty(data.name, "Vendor name"),
            email=optional_text(data.email, max_length=160, field_name="email"),
            phone=optional_text(data.phone, max_length=40, field_name="phone"),
        )

    def create_vendor(self, data: VendorInput) -> Vendor:
        vendor = self._vendors.create(self._build(0, data))
        logger.info("Created vendor %s (%s)", vendor.vendor_id, vendor.name)
        return vendor

    def update_vendor(self, vendor_id: int, data: VendorInput) -> Vendor:
        current = self.get_vendor(vendor_id)
        vendor = self._build(current.vendor_id, merge_partial(VendorInput.from_record(current), data))
        self._vendors.update(vendor)
        logger.info("Updated vendor %s", vendor_id)
        return vendor

    def get_vendor(self, vendor_id: int) -> Vendor:
        vendor = self._vendors.get_by_id(int(vendor_id))
        if not vendor:
            raise NotFoundError("Vendor not found")
        return vendor

    def list_vendors(self) -> Sequence[Vendor]:
        return self._vendors.list_all()

    def delete_vendor(self, vendor_id: int) -> None:
        if not self._vendors.delete(int(vendor_id)):
            raise NotFoundError("Vendor not found")
        logger.info("Deleted vendor %s", vendor_id)
