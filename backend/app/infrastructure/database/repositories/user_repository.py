"""Concrete repository implementation for User backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import UserRepository
from app.domain.entities import User, UserRole
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from app.infrastructure.database.models import UserModel
from app.infrastructure.database.repositories._timestamps import as_utc


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        """Map ORM model → domain entity."""
        return User(
            id=model.id,
            external_identity=model.external_identity,
            role=UserRole(model.role),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    async def get_by_external_identity(self, external_identity: str) -> User | None:
        stmt = select(UserModel).where(UserModel.external_identity == external_identity).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            external_identity=user.external_identity,
            role=user.role.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self._session.add(model)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateEntityError(
                "User", "external_identity", user.external_identity
            ) from exc
        return self._to_entity(model)

    async def update_role(self, user_id: str, role: UserRole) -> User:
        model = await self._session.get(UserModel, user_id)
        if model is None:
            raise EntityNotFoundError("User", user_id)
        model.role = role.value
        model.updated_at = datetime.now(timezone.utc)
        await self._session.commit()
        return self._to_entity(model)
