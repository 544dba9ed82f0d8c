"""Map mysql-connector integrity errors onto domain errors.

Anything not listed here is re-raised untouched and ends up as a 500.
"""

from __future__ import annotations

from typing import Optional

from mysql.connector import errorcode
from mysql.connector.errors import Error as MySQLError

from ..core.exceptions import ConflictError, DomainError, ValidationError

_DUPLICATE = {errorcode.ER_DUP_ENTRY, errorcode.ER_DUP_KEY}
_BAD_REFERENCE = {
    errorcode.ER_NO_REFERENCED_ROW,
    errorcode.ER_NO_REFERENCED_ROW_2,
    errorcode.ER_ROW_IS_REFERENCED,
    errorcode.ER_ROW_IS_REFERENCED_2,
}
_MISSING_FIELD = {errorcode.ER_BAD_NULL_ERROR, errorcode.ER_NO_DEFAULT_FOR_FIELD}


def translate_db_error(exc: MySQLError) -> Optional[DomainError]:
    errno = getattr(exc, "errno", None)
    if errno in _DUPLICATE:
        return ConflictError("A record with this information already exists")
    if errno in _BAD_REFERENCE:
        return ValidationError("Invalid reference to related resource")
    if errno in _MISSING_FIELD:
        return ValidationError("A required field is missing")
    return None
