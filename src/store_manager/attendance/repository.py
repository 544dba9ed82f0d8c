from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list(self, flt: AttendanceFilter, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Newest check-in first. ``start``/``end`` are inclusive calendar days."""
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError
