"""
Centralized permission checks shared by the API dependencies and services.
"""

from enums.user_role import UserRole
from models.order import OrderDTO
from models.user import UserDTO


def is_admin(user: UserDTO | None) -> bool:
    """
    Check if a user has the admin role.

    Example:
        >>> is_admin(UserDTO(id=1, role=UserRole.ADMIN))
        True
        >>> is_admin(None)
        False
    """
    return user is not None and user.role == UserRole.ADMIN


def can_view_order(user: UserDTO, order: OrderDTO) -> bool:
    """Owners and admins may read an order."""
    return is_admin(user) or order.user_id == user.id
