"""
Capability checks shared by every protected endpoint.

Views never inspect roles themselves; they declare the capability they need
with ``Depends(requires(Capability.ADMIN))`` and receive the current user.
"""

from enum import Enum
from typing import Optional

from fastapi import Depends, HTTPException, status

from . import models
from .security import get_current_user


class Capability(str, Enum):
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


def has_capability(user: Optional[models.User], capability: Capability) -> bool:
    if user is None:
        return False
    if capability is Capability.ADMIN:
        return bool(user.is_admin)
    return True


def requires(capability: Capability):
    def dependency(user: Optional[models.User] = Depends(get_current_user)) -> models.User:
        if has_capability(user, capability):
            return user
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")

    return dependency


require_user = requires(Capability.AUTHENTICATED)
require_admin = requires(Capability.ADMIN)
