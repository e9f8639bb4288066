from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush, session_refresh
from models.user import User, UserDTO


class UserRepository:

    @staticmethod
    async def create(user_dto: UserDTO, session: AsyncSession) -> UserDTO:
        user = User(**user_dto.model_dump(exclude_none=True, exclude={'id', 'registered_at'}))
        session.add(user)
        await session_flush(session)
        await session_refresh(session, user)
        return UserDTO.model_validate(user, from_attributes=True)

    @staticmethod
    async def get_by_id(user_id: int, session: AsyncSession) -> UserDTO | None:
        stmt = select(User).where(User.id == user_id)
        user = await session_execute(stmt, session)
        user = user.scalar()
        if user is not None:
            return UserDTO.model_validate(user, from_attributes=True)
        else:
            return None

    @staticmethod
    async def get_by_email(email: str, session: AsyncSession) -> UserDTO | None:
        stmt = select(User).where(User.email == email.strip().lower())
        user = await session_execute(stmt, session)
        user = user.scalar()
        if user is not None:
            return UserDTO.model_validate(user, from_attributes=True)
        else:
            return None
