"""Request identity.

Authentication happens upstream. The gateway in front of this service
forwards the authenticated user's id and role as headers.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from storefront.errors import ForbiddenError

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Requester:
    user_id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def current_user(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default="user"),
) -> Requester:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized request")
    return Requester(user_id=x_user_id, role=x_user_role.strip().lower())


def admin_user(requester: Requester = Depends(current_user)) -> Requester:
    if not requester.is_admin:
        raise ForbiddenError("Admin access required")
    return requester
