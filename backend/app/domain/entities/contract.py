"""Domain entity for transport service contracts."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from app.domain.exceptions import ValidationError

# attribute name → public (API) field name, in validation order
REQUIRED_FIELDS: dict[str, str] = {
    "city": "city",
    "address": "address",
    "driver_name": "driverName",
    "id_number": "idNumber",
    "birthday": "birthday",
}

MUTABLE_FIELDS: tuple[str, ...] = (*REQUIRED_FIELDS, "extra_notes")


class DocumentStatus(str, Enum):
    """Lifecycle of the rendered PDF attached to a contract."""

    NONE = "none"
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass
class Contract:
    """Core domain entity: one driver's transport service contract.

    ``document_ref`` points at the last successfully uploaded PDF and is
    empty until the first render succeeds. ``document_status`` tells a
    contract that was never rendered apart from one whose last render
    failed.
    """

    city: str
    address: str
    driver_name: str
    id_number: str
    birthday: str
    created_by: str
    extra_notes: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))
    document_ref: str = ""
    document_status: DocumentStatus = DocumentStatus.NONE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def validate_required(self) -> None:
        """Raise ValidationError naming the first empty required field."""
        for attr, public_name in REQUIRED_FIELDS.items():
            value = getattr(self, attr)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(public_name)

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Partial merge: missing, falsy or blank values keep the stored value.

        Unknown keys and identity fields (``id``, ``created_by``,
        ``created_at``) are ignored.
        """
        for attr in MUTABLE_FIELDS:
            value = changes.get(attr)
            if not value or (isinstance(value, str) and not value.strip()):
                continue
            setattr(self, attr, value)
        self.touch()

    def attach_document(self, document_ref: str) -> None:
        """Record a successfully uploaded document."""
        self.document_ref = document_ref
        self.document_status = DocumentStatus.READY
        self.touch()

    def mark_document_pending(self) -> None:
        self.document_status = DocumentStatus.PENDING

    def mark_document_failed(self) -> None:
        """Keep the previous reference; only the status changes."""
        self.document_status = DocumentStatus.FAILED

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
