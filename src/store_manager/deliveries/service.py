from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..common.durations import hours_between
from ..common.validators import (
    assert_currency_supported,
    assert_positive_integer,
    assert_valid_date_range,
    merge_partial,
    optional_text,
    parse_currency,
    parse_date,
    parse_datetime,
    parse_integer,
    parse_minor_amount,
    require_id,
)
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..stores.repository import StoreRepository
from .driver_repository import DriverRepository
from .model import DeliveryFilter, DeliveryRecord
from .repository import DeliveryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryInput:
    driver_id: Any = None
    store_id: Any = None
    delivery_date: Any = None
    check_in: Any = None
    check_out: Any = None
    number_of_deliveries: Any = None
    currency: Any = None
    expense_amount: Any = None
    notes: Any = None

    @classmethod
    def from_record(cls, record: DeliveryRecord) -> DeliveryInput:
        return cls(
            driver_id=record.driver_id,
            store_id=record.store_id,
            delivery_date=record.delivery_date,
            check_in=record.check_in,
            check_out=record.check_out,
            number_of_deliveries=record.number_of_deliveries,
            currency=record.currency,
            expense_amount=record.expense_amount,
            notes=record.notes,
        )


class DeliveryService:
    """Use cases: log driver runs with their hours, drop count and costs."""

    def __init__(self, deliveries: DeliveryRepository, drivers: DriverRepository, stores: StoreRepository):
        self._deliveries = deliveries
        self._drivers = drivers
        self._stores = stores

    def _build(self, delivery_id: int, data: DeliveryInput) -> DeliveryRecord:
        driver_id = require_id(data.driver_id, "driverId", "Driver is required")
        store_id = require_id(data.store_id, "storeId", "Store is required")
        if not data.delivery_date:
            raise ValidationError("Delivery date is required")
        if not data.check_in or not data.check_out:
            raise ValidationError("Check-in and check-out times are required")
        currency = parse_currency(data.currency)

        if not self._drivers.get_by_id(driver_id):
            raise NotFoundError("Driver not found")
        store = self._stores.get_by_id(store_id)
        if not store:
            raise NotFoundError("Store not found")
        assert_currency_supported(store, currency)

        check_in = parse_datetime(data.check_in, "checkIn")
        check_out = parse_datetime(data.check_out, "checkOut")
        assert_valid_date_range(check_in, check_out)

        if data.number_of_deliveries is None or data.number_of_deliveries == "":
            raise ValidationError("Number of deliveries must be a positive number")
        count = parse_integer(data.number_of_deliveries, "Number of deliveries")
        assert_positive_integer(count, "Number of deliveries")

        return DeliveryRecord(
            delivery_id=delivery_id,
            driver_id=driver_id,
            store_id=store_id,
            delivery_date=parse_date(data.delivery_date, "deliveryDate"),
            check_in=check_in,
            check_out=check_out,
            hours_worked=hours_between(check_in, check_out),
            number_of_deliveries=count,
            currency=currency,
            expense_amount=parse_minor_amount(data.expense_amount, "Expense amount", default=0),
            notes=optional_text(data.notes, max_length=255, field_name="notes"),
        )

    def record_delivery(self, data: DeliveryInput) -> DeliveryRecord:
        record = self._deliveries.create(self._build(0, data))
        logger.info(
            "Recorded delivery run %s: driver=%s store=%s deliveries=%s expense=%s %s",
            record.delivery_id, record.driver_id, record.store_id,
            record.number_of_deliveries, record.expense_amount, record.currency.value,
        )
        return record

    def update_delivery(self, delivery_id: int, data: DeliveryInput) -> DeliveryRecord:
        current = self.get(delivery_id)
        record = self._build(current.delivery_id, merge_partial(DeliveryInput.from_record(current), data))
        self._deliveries.update(record)
        logger.info("Updated delivery run %s", delivery_id)
        return record

    def get(self, delivery_id: int) -> DeliveryRecord:
        record = self._deliveries.get_by_id(int(delivery_id))
        if not record:
            raise NotFoundError("Delivery not found")
        return record

    def list(self, flt: Optional[DeliveryFilter] = None, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[DeliveryRecord]:
        return self._deliveries.list(flt or DeliveryFilter(), limit=limit)

    def delete(self, delivery_id: int) -> None:
        if not self._deliveries.delete(int(delivery_id)):
            raise NotFoundError("Delivery not found")
        logger.info("Deleted delivery run %s", delivery_id)
