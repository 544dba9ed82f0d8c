from decimal import Decimal

import pytest

from store_manager.core.enums import Currency
from store_manager.core.exceptions import NotFoundError, ValidationError
from store_manager.deliveries.driver_service import DriverInput, DriverService
from store_manager.deliveries.service import DeliveryInput, DeliveryService


def _service(repos):
    return DeliveryService(repos.deliveries, repos.drivers, repos.stores)


def _input(driver, store, **overrides):
    values = dict(
        driver_id=driver.driver_id,
        store_id=store.store_id,
        delivery_date="2024-03-01",
        check_in="2024-03-01T17:00:00Z",
        check_out="2024-03-01T20:30:00Z",
        number_of_deliveries=14,
        currency="EUR",
        expense_amount=1800,
    )
    values.update(overrides)
    return DeliveryInput(**values)


def test_record_delivery_run(repos):
    driver, store = repos.add_driver(), repos.add_store()

    run = _service(repos).record_delivery(_input(driver, store))

    assert run.hours_worked == Decimal("3.50")
    assert run.number_of_deliveries == 14
    assert run.expense_amount == 1800
    assert run.currency == Currency.EUR


def test_expense_defaults_to_zero(repos):
    driver, store = repos.add_driver(), repos.add_store()
    run = _service(repos).record_delivery(_input(driver, store, expense_amount=None))
    assert run.expense_amount == 0


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"driver_id": None}, "Driver is required"),
        ({"delivery_date": ""}, "Delivery date is required"),
        ({"check_in": None}, "Check-in and check-out times are required"),
        ({"number_of_deliveries": 0}, "Number of deliveries must be a positive number"),
        ({"number_of_deliveries": None}, "Number of deliveries must be a positive number"),
        ({"expense_amount": -5}, "Expense amount must be a non-negative number"),
        ({"check_out": "2024-03-01T16:00:00Z"}, "Check-out time must be after check-in time"),
        ({"currency": "GBP"}, "This store does not support GBP"),
    ],
)
def test_delivery_validation(repos, overrides, message):
    driver, store = repos.add_driver(), repos.add_store()
    with pytest.raises(ValidationError, match=message):
        _service(repos).record_delivery(_input(driver, store, **overrides))
    assert repos.deliveries.rows == {}


def test_unknown_driver(repos):
    store = repos.add_store()
    with pytest.raises(NotFoundError, match="Driver not found"):
        _service(repos).record_delivery(DeliveryInput(driver_id=5, store_id=store.store_id, delivery_date="2024-03-01",
                                                      check_in="2024-03-01T17:00:00Z",
                                                      check_out="2024-03-01T18:00:00Z",
                                                      number_of_deliveries=1, currency="EUR"))


def test_update_and_delete_run(repos):
    driver, store = repos.add_driver(), repos.add_store()
    svc = _service(repos)
    run = svc.record_delivery(_input(driver, store))

    updated = svc.update_delivery(run.delivery_id, _input(driver, store, number_of_deliveries=20))
    assert svc.get(run.delivery_id).number_of_deliveries == 20
    assert updated.delivery_id == run.delivery_id

    svc.delete(run.delivery_id)
    with pytest.raises(NotFoundError, match="Delivery not found"):
        svc.get(run.delivery_id)


def test_update_new_times_rederive_hours(repos):
    driver, store = repos.add_driver(), repos.add_store()
    svc = _service(repos)
    run = svc.record_delivery(_input(driver, store, notes="wet"))

    updated = svc.update_delivery(run.delivery_id, DeliveryInput(check_out="2024-03-01T22:00:00Z"))

    assert updated.hours_worked == Decimal("5.00")
    assert updated.number_of_deliveries == 14
    assert updated.expense_amount == 1800
    assert updated.notes == "wet"

    with pytest.raises(ValidationError, match="This store does not support GBP"):
        svc.update_delivery(run.delivery_id, DeliveryInput(currency="GBP"))
    assert svc.get(run.delivery_id) == updated


def test_driver_crud(repos):
    svc = DriverService(repos.drivers)
    driver = svc.create_driver(DriverInput(name="Dan", phone="087 000"))
    assert svc.get_driver(driver.driver_id).phone == "087 000"
    with pytest.raises(ValidationError):
        svc.create_driver(DriverInput(name=" "))


def test_driver_update_keeps_contact_details(repos):
    svc = DriverService(repos.drivers)
    driver = svc.create_driver(DriverInput(name="Dan", phone="087 000"))

    renamed = svc.update_driver(driver.driver_id, DriverInput(name="Daniel"))

    assert renamed.name == "Daniel"
    assert renamed.phone == "087 000"
