from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Store


class StoreRepository(Protocol):
    """Persistence port for stores and their staff assignments.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, store_id: int) -> Optional[Store]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Store]:
        raise NotImplementedError

    def create(self, store: Store) -> Store:
        """Insert ``store`` (its id is ignored) and return it with the new id."""
        raise NotImplementedError

    def update(self, store: Store) -> bool:
        raise NotImplementedError

    def delete(self, store_id: int) -> bool:
        raise NotImplementedError

    def assign_employee(self, store_id: int, employee_id: int) -> None:
        raise NotImplementedError

    def unassign_employee(self, store_id: int, employee_id: int) -> bool:
        raise NotImplementedError

    def assign_driver(self, store_id: int, driver_id: int) -> None:
        raise NotImplementedError

    def unassign_driver(self, store_id: int, driver_id: int) -> bool:
        raise NotImplementedError
