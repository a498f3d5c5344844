# File: volunteerhub/core/principal.py
from dataclasses import dataclass
from volunteerhub.models.user import UserRole


@dataclass(frozen=True)
class Principal:
    """Verified caller identity, resolved once per request"""

    user_id: int
    role: UserRole
    display_name: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_company(self) -> bool:
        return self.role == UserRole.COMPANY

    @property
    def is_volunteer(self) -> bool:
        return self.role == UserRole.VOLUNTEER
