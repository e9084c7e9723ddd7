"""Concrete repository implementation for Contract backed by SQLAlchemy.

Each write commits immediately so that the record written before the PDF
is rendered stays durable even when rendering fails afterwards.
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import ContractRepository
from app.domain.entities import Contract, DocumentStatus
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.database.models import ContractModel
from app.infrastructure.database.repositories._timestamps import as_utc


class SQLAlchemyContractRepository(ContractRepository):
    """Implements the ContractRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ContractModel) -> Contract:
        """Map ORM model → domain entity."""
        return Contract(
            id=model.id,
            city=model.city,
            address=model.address,
            driver_name=model.driver_name,
            id_number=model.id_number,
            birthday=model.birthday,
            extra_notes=model.extra_notes or "",
            created_by=model.created_by,
            document_ref=model.document_ref or "",
            document_status=DocumentStatus(model.document_status),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Contract) -> ContractModel:
        """Map domain entity → ORM model (for creation)."""
        return ContractModel(
            id=entity.id,
            city=entity.city,
            address=entity.address,
            driver_name=entity.driver_name,
            id_number=entity.id_number,
            birthday=entity.birthday,
            extra_notes=entity.extra_notes,
            created_by=entity.created_by,
            document_ref=entity.document_ref,
            document_status=entity.document_status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def _require_model(self, contract_id: str) -> ContractModel:
        model = await self._session.get(ContractModel, contract_id)
        if model is None:
            raise EntityNotFoundError("Contract", contract_id)
        return model

    async def get_by_id(self, contract_id: str) -> Contract | None:
        result = await self._session.get(ContractModel, contract_id)
        return self._to_entity(result) if result else None

    async def get_all(self, *, created_by: str | None = None) -> list[Contract]:
        stmt = select(ContractModel)
        if created_by is not None:
            stmt = stmt.where(ContractModel.created_by == created_by)

        stmt = stmt.order_by(ContractModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, contract: Contract) -> Contract:
        contract.validate_required()
        model = self._to_model(contract)
        self._session.add(model)
        await self._session.commit()
        return self._to_entity(model)

    async def update(self, contract: Contract) -> Contract:
        model = await self._require_model(contract.id)
        model.city = contract.city
        model.address = contract.address
        model.driver_name = contract.driver_name
        model.id_number = contract.id_number
        model.birthday = contract.birthday
        model.extra_notes = contract.extra_notes
        model.document_status = contract.document_status.value
        model.updated_at = contract.updated_at
        await self._session.commit()
        return self._to_entity(model)

    async def patch_document(
        self,
        contract_id: str,
        *,
        status: DocumentStatus,
        document_ref: str = "",
    ) -> Contract:
        model = await self._require_model(contract_id)
        if document_ref:
            model.document_ref = document_ref
        model.document_status = status.value
        model.updated_at = datetime.now(timezone.utc)
        await self._session.commit()
        return self._to_entity(model)

    async def delete(self, contract_id: str) -> bool:
        model = await self._session.get(ContractModel, contract_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.commit()
        return True
