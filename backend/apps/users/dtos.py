from dataclasses import dataclass
from typing import Optional
from .models import User


@dataclass
class UserDTO:
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    is_verified: bool
    company_name: Optional[str]
    created_at: Optional[str]


def user_to_dto(u: User) -> UserDTO:
    created = getattr(u, "created_at", None)
    if created is not None:
        try:
            created = created.isoformat()
        except AttributeError:
            created = str(created)
    return UserDTO(
        id=u.id,
        email=u.email,
        first_name=u.first_name,
        last_name=u.last_name,
        role=str(u.role),
        is_verified=bool(u.is_verified),
        company_name=u.company_name,
        created_at=created,
    )
