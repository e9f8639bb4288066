import logging

from sqlalchemy.ext.asyncio import AsyncSession

from enums.user_role import UserRole
from models.user import UserDTO
from repositories.user import UserRepository
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    async def get_by_id(user_id: int, session: AsyncSession) -> UserDTO | None:
        return await UserRepository.get_by_id(user_id, session)

    @staticmethod
    async def create_if_not_exist(email: str, name: str, role: UserRole, session: AsyncSession) -> UserDTO:
        """
        Returns the user with this email, creating it first if needed.

        An existing user keeps its stored name and role.
        """
        user = await UserRepository.get_by_email(email, session)
        if user is not None:
            return user
        async with TransactionManager.atomic_transaction(session):
            user = await UserRepository.create(UserDTO(email=email.strip().lower(), name=name, role=role), session)
        logger.info(f"User {user.id} registered with role {user.role.value}")
        return user
