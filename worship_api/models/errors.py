# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain errors — raised by the store's services, mapped to HTTP by controllers.
"""

from typing import Any


class WorshipError(Exception):
    """Base class for every failure the core signals on purpose."""

    code: str = "worship_error"


class RecordNotFound(WorshipError):
    """An operation addressed a record id that does not exist."""

    code = "not_found"

    def __init__(self, kind: str, record_id: int) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} with id {record_id} not found")


class WriteRejected(WorshipError):
    """A create/update was refused before touching the store."""

    code = "write_rejected"


class ReferenceNotFound(WriteRejected):
    """A soloist or song reference supplied in a write does not resolve."""

    code = "reference_not_found"

    def __init__(self, kind: str, field: str, ref_id: Any) -> None:
        self.kind = kind
        self.field = field
        self.ref_id = ref_id
        super().__init__(
            f"{kind.capitalize()} with id {ref_id} referenced by '{field}' not found"
        )


class DuplicateEmail(WriteRejected):
    """A member create/update would produce a non-unique email."""

    code = "duplicate_email"

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"A member with email '{email}' already exists")


class ValidationError(WriteRejected):
    """Structurally invalid input reaching the core (e.g. an empty scale)."""

    code = "validation_error"


class InvalidCredentials(WorshipError):
    """Login refused: unknown email or wrong password (not distinguished)."""

    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid email or password")
