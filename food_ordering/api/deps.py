"""
Request dependencies: database session, bearer token, caller
"""
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from food_ordering.core.database import get_db
from food_ordering.core.exceptions import Unauthorized
from food_ordering.core.security import decode_access_token
from food_ordering.models.user import User
from food_ordering.services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_token(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> str:
    if not creds or not creds.credentials:
        raise Unauthorized("Authorization required")
    return creds.credentials


def get_token_claims(token: str = Depends(get_token)) -> Dict[str, Any]:
    return decode_access_token(token)


def get_current_user(
    token: str = Depends(get_token),
    db: Session = Depends(get_db),
) -> User:
    """Get current authenticated user"""
    return AuthService(db).resolve_user(token)
