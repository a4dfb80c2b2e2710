from typing import Literal, Optional
from urllib.parse import quote
import enum

from smartschool.models.base import CamelModel


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


Gender = Literal["Male", "Female"]


class User(CamelModel):
    id: str
    name: str
    email: Optional[str] = None
    role: UserRole
    avatar: Optional[str] = None
    school_id: Optional[str] = None
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    bio: Optional[str] = None

    def __repr__(self):
        return f"<User {self.name} ({self.role.value})>"


def avatar_from_name(name: str) -> str:
    """Generated avatar URL used when a user or student has none."""
    return f"https://ui-avatars.com/api/?name={quote(name)}&background=random"
