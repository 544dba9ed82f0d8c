from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..common.validators import merge_partial, optional_text, require_non_empty
from ..core.exceptions import NotFoundError
from .driver_model import Driver
from .driver_repository import DriverRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriverInput:
    name: Any = None
    email: Any = None
    phone: Any = None

    @classmethod
    def from_record(cls, driver: Driver) -> DriverInput:
        return cls(name=driver.name, email=driver.email, phone=driver.phone)


class DriverService:
    def __init__(self, drivers: DriverRepository):
        self._drivers = drivers

    def _build(self, driver_id: int, data: DriverInput) -> Driver:
        return Driver(
            driver_id=driver_id,
            name=require_non_empty(data.name, "Driver name"),
            email=optional_text(data.email, max_length=160, field_name="email"),
            phone=optional_text(data.phone, max_length=40, field_name="phone"),
        )

    def create_driver(self, data: DriverInput) -> Driver:
        driver = self._drivers.create(self._build(0, data))
        logger.info("Created driver %s (%s)", driver.driver_id, driver.name)
        return driver

    def update_driver(self, driver_id: int, data: DriverInput) -> Driver:
        current = self.get_driver(driver_id)
        driver = self._build(current.driver_id, merge_partial(DriverInput.from_record(current), data))
        self._drivers.update(driver)
        logger.info("Updated driver %s", driver_id)
        return driver

    def get_driver(self, driver_id: int) -> Driver:
        driver = self._drivers.get_by_id(int(driver_id))
        if not driver:
            raise NotFoundError("Driver not found")
        return driver

    def list_drivers(self, *, store_id: Optional[int] = None) -> Sequence[Driver]:
        return self._drivers.list_all(store_id=store_id)

    def delete_driver(self, driver_id: int) -> None:
        if not self._drivers.delete(int(driver_id)):
            raise NotFoundError("Driver not found")
        logger.info("Deleted driver %s", driver_id)
