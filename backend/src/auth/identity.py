"""
Authenticated identity resolved from a session.
"""

from typing import Iterable, Optional

from pydantic import BaseModel

from core.constants import ROLE_DOCTOR


class UserContext(BaseModel):
    """Who is calling: the user behind a valid session token."""

    user_id: int
    email: str
    name: str
    role: str  # 'doctor' | 'assistant'
    specialty: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "UserContext":
        return cls(
            user_id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            specialty=user.specialty,
        )

    def is_doctor(self) -> bool:
        return self.role == ROLE_DOCTOR

    def has_any_role(self, roles: Iterable[str]) -> bool:
        return self.role in set(roles)

    def __repr__(self) -> str:
        return f"UserContext(user_id={self.user_id}, email='{self.email}', role='{self.role}')"
