"""SQLAlchemy ORM model for the Contract entity."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class ContractModel(Base):
    """ORM model — maps to the 'contracts' table."""

    __tablename__ = "contracts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    driver_name: Mapped[str] = mapped_column(String(100), nullable=False)
    id_number: Mapped[str] = mapped_column(String(32), nullable=False)
    birthday: Mapped[str] = mapped_column(String(32), nullable=False)
    extra_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)
    document_ref: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    document_status: Mapped[str] = mapped_column(String(20), nullable=False, default="none")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_contracts_created_by", "created_by"),
        Index("ix_contracts_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<ContractModel(id={self.id}, driver='{self.driver_name}', "
            f"status='{self.document_status}')>"
        )
