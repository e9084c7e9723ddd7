"""Contract CRUD endpoints. Every route resolves the caller first."""

from fastapi import APIRouter, Depends, status

from app.application.schemas.contract import (
    ContractCreate,
    ContractEnvelope,
    ContractListResponse,
    ContractOut,
    ContractUpdate,
    MessageResponse,
    iso_timestamp,
)
from app.application.services import ContractService, ContractView
from app.domain.entities import User
from app.infrastructure.dependencies import get_contract_service, get_current_user

router = APIRouter(prefix="/contracts", tags=["Contracts"])


def _to_out(view: ContractView) -> ContractOut:
    contract = view.contract
    return ContractOut(
        id=contract.id,
        city=contract.city,
        address=contract.address,
        driver_name=contract.driver_name,
        id_number=contract.id_number,
        birthday=contract.birthday,
        extra_notes=contract.extra_notes,
        created_by=contract.created_by,
        created_at=iso_timestamp(contract.created_at),
        updated_at=iso_timestamp(contract.updated_at),
        document_ref=contract.document_ref,
        document_status=contract.document_status.value,
        pdf_url=view.pdf_url,
    )


@router.get("", response_model=ContractListResponse)
async def list_contracts(
    user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service),
) -> ContractListResponse:
    """Own contracts for users, all contracts for admins."""
    listing = await service.list_contracts(user)
    return ContractListResponse(
        contracts=[_to_out(v) for v in listing.contracts],
        role=listing.role.value,
    )


@router.post("", response_model=ContractEnvelope, status_code=status.HTTP_201_CREATED)
async def create_contract(
    data: ContractCreate,
    user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service),
) -> ContractEnvelope:
    """Create a contract and render its PDF."""
    view = await service.create_contract(user, data)
    return ContractEnvelope(contract=_to_out(view))


@router.get("/{contract_id}", response_model=ContractEnvelope)
async def get_contract(
    contract_id: str,
    user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service),
) -> ContractEnvelope:
    view = await service.get_contract(user, contract_id)
    return ContractEnvelope(contract=_to_out(view))


@router.put("/{contract_id}", response_model=ContractEnvelope)
async def update_contract(
    contract_id: str,
    data: ContractUpdate,
    user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service),
) -> ContractEnvelope:
    """Merge the supplied fields and re-render the PDF."""
    view = await service.update_contract(user, contract_id, data)
    return ContractEnvelope(contract=_to_out(view))


@router.delete("/{contract_id}", response_model=MessageResponse)
async def delete_contract(
    contract_id: str,
    user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service),
) -> MessageResponse:
    await service.delete_contract(user, contract_id)
    return MessageResponse(message="删除成功")
