"""
API dependencies for dependency injection
"""

from dataclasses import dataclass
from typing import Generator
from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.exceptions import UnauthorizedError
from domain.enums import CallerRole
from domain.models import Database


@dataclass(frozen=True)
class Caller:
    """Identity asserted by the upstream authentication layer"""

    user_id: UUID
    role: CallerRole


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized")
    return database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from database.get_session()


def get_caller(
    x_user_id: str = Header(None, alias="X-User-Id"),
    x_user_role: str = Header(None, alias="X-User-Role"),
) -> Caller:
    """Read the caller identity forwarded by the auth gateway."""
    if not x_user_id or not x_user_role:
        raise UnauthorizedError("Missing caller identity")
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise UnauthorizedError("Invalid caller id")
    try:
        role = CallerRole(x_user_role.strip().upper())
    except ValueError:
        raise UnauthorizedError("Invalid caller role")
    return Caller(user_id=user_id, role=role)


def require_role(*allowed: CallerRole):
    allowed_roles = set(allowed)

    def role_checker(caller: Caller = Depends(get_caller)) -> Caller:
        if caller.role not in allowed_roles:
            raise UnauthorizedError("Access denied", code="ROLE_NOT_ALLOWED")
        return caller

    return role_checker


require_dietician = require_role(CallerRole.DIETICIAN)
