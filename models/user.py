from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, Integer, DateTime, String, func
from sqlalchemy import Enum as SQLEnum

from enums.user_role import UserRole
from models.base import Base


class User(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.USER)
    registered_at = Column(DateTime, default=func.now())


class UserDTO(BaseModel):
    id: int | None = None
    email: str | None = None
    name: str | None = None
    role: UserRole | None = None
    registered_at: datetime | None = None
