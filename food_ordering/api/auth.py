"""
Authentication API router
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from food_ordering.api.deps import get_token_claims
from food_ordering.core.database import get_db
from food_ordering.core.exceptions import Unauthorized
from food_ordering.models.common import Envelope
from food_ordering.models.user import AuthData, LoginRequest, TokenClaims, UserCreate, UserResponse
from food_ordering.services.auth_service import AuthResult, AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_data(result: AuthResult) -> AuthData:
    return AuthData(access_token=result.access_token, user=UserResponse.model_validate(result.user))


@router.post("/signup", response_model=Envelope[AuthData], status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserCreate,
    db: Session = Depends(get_db)
) -> Any:
    """Register a new user and return an access token"""
    result = AuthService(db).signup(user_data)
    return Envelope[AuthData](message="User registered successfully", data=_auth_data(result))


@router.post("/login", response_model=Envelope[AuthData])
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
) -> Any:
    """Login user and return access token"""
    result = AuthService(db).login(credentials.email, credentials.password)
    return Envelope[AuthData](message="Login successful", data=_auth_data(result))


@router.post("/verify-token", response_model=Envelope[TokenClaims])
def verify_token(claims: Dict[str, Any] = Depends(get_token_claims)) -> Any:
    """Echo the claims of a valid token"""
    try:
        data = TokenClaims(
            user_id=int(claims["sub"]),
            email=claims.get("email"),
            role=claims.get("role"),
            country=claims.get("country"),
        )
    except (TypeError, ValueError):
        raise Unauthorized("Invalid or expired token")
    return Envelope[TokenClaims](message="Token is valid", data=data)
