"""API dependencies for dependency injection."""

from typing import Any, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorCollection
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.core.permissions import Permission, Role, ensure_permission, has_permission
from folio.core.security import verify_access_token
from folio.db.mongodb import get_portfolios_collection
from folio.db.postgres import get_db
from folio.fonts.loader import FontLoader
from folio.models.nosql.portfolio import Portfolio
from folio.models.sql.user import User

# Security scheme
security = HTTPBearer()


async def _user_from_token(token: str, db: AsyncSession) -> Optional[User]:
    payload = verify_access_token(token)
    user_id = UUID(payload["sub"])
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get the current authenticated user."""
    try:
        user = await _user_from_token(credentials.credentials, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(
        HTTPBearer(auto_error=False)
    ),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Get the current user if authenticated, otherwise None."""
    if credentials is None:
        return None

    try:
        user = await _user_from_token(credentials.credentials, db)
    except ValueError:
        return None

    if user is None or not user.is_active:
        return None
    return user


class RequirePermission:
    """Dependency asserting the current user's role grants a permission."""

    def __init__(self, permission: Permission):
        self.permission = permission

    async def __call__(self, current_user: User = Depends(get_current_user)) -> User:
        ensure_permission(current_user.role, self.permission)
        return current_user


def get_font_loader(request: Request) -> FontLoader:
    """Font loader created by the application lifespan."""
    return request.app.state.font_loader


def _as_role(user: Optional[User]) -> Optional[Role]:
    if user is None:
        return None
    try:
        return Role(user.role)
    except ValueError:
        return None


class PortfolioAccess:
    """Load a portfolio and check the caller may act on it.

    Owners need ``permission``; anyone else needs its ``*_any`` counterpart.
    Published portfolios are readable without authentication.
    """

    def __init__(self, permission: Permission, any_permission: Permission):
        self.permission = permission
        self.any_permission = any_permission

    async def __call__(
        self,
        portfolio_id: str,
        current_user: Optional[User] = Depends(get_optional_user),
        collection: AsyncIOMotorCollection = Depends(get_portfolios_collection),
    ) -> Portfolio:
        document: Optional[dict[str, Any]] = await collection.find_one({"_id": portfolio_id})
        if document is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Portfolio not found",
            )
        portfolio = Portfolio.from_mongo(document)

        is_read = self.permission == Permission.PORTFOLIO_READ
        if is_read and portfolio.is_published:
            return portfolio

        if current_user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )

        role = _as_role(current_user)
        is_owner = portfolio.user_id == str(current_user.id)
        required = self.permission if is_owner else self.any_permission
        if role is None or not has_permission(role, required):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to access this portfolio",
            )

        return portfolio


# Common portfolio access dependencies
require_portfolio_reader = PortfolioAccess(
    Permission.PORTFOLIO_READ, Permission.PORTFOLIO_READ_ANY
)
require_portfolio_editor = PortfolioAccess(
    Permission.PORTFOLIO_UPDATE, Permission.PORTFOLIO_UPDATE_ANY
)
require_portfolio_owner = PortfolioAccess(
    Permission.PORTFOLIO_DELETE, Permission.PORTFOLIO_DELETE_ANY
)
