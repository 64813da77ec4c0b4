"""
User administration API router
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from food_ordering.api.deps import get_current_user
from food_ordering.core.database import get_db
from food_ordering.core.policy import ALL_ROLES, STAFF_ROLES, AccessPolicy, authorize
from food_ordering.models.common import Envelope
from food_ordering.models.user import (
    ChangePasswordRequest, ProfileUpdate, RoleUpdate, User, UserCreate,
    UserPage, UserResponse, UserRole, UserStats, UserUpdate,
)
from food_ordering.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

SELF_SERVICE = AccessPolicy.of(*ALL_ROLES)
MANAGE_USERS = AccessPolicy.of(*STAFF_ROLES, country_scoped=True)
ADMIN_ONLY = AccessPolicy.of(UserRole.ADMIN)


def _user(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


@router.post("", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(MANAGE_USERS, current_user.role, current_user.country, resource_country=user_data.country)
    user = UserService(db).create(current_user, user_data)
    return Envelope[UserResponse](message="User created successfully", data=_user(user))


@router.get("", response_model=Envelope[UserPage])
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    role: Optional[str] = None,
    country: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(MANAGE_USERS, current_user.role, current_user.country, resource_country=country)
    result = UserService(db).list_users(current_user, page, limit, role=role, country=country)
    return Envelope[UserPage](message="Users retrieved successfully", data=UserPage.model_validate(result))


@router.get("/search", response_model=Envelope[UserPage])
def search_users(
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(MANAGE_USERS, current_user.role, current_user.country)
    result = UserService(db).search(current_user, q, page, limit)
    return Envelope[UserPage](message="Search completed successfully", data=UserPage.model_validate(result))


@router.get("/stats", response_model=Envelope[UserStats])
def user_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(ADMIN_ONLY, current_user.role, current_user.country)
    stats = UserService(db).stats()
    return Envelope[UserStats](message="User statistics retrieved successfully", data=UserStats.model_validate(stats))


@router.get("/profile", response_model=Envelope[UserResponse])
def get_profile(current_user: User = Depends(get_current_user)) -> Any:
    authorize(SELF_SERVICE, current_user.role, current_user.country)
    return Envelope[UserResponse](message="Profile retrieved successfully", data=_user(current_user))


@router.patch("/profile", response_model=Envelope[UserResponse])
def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    """Users edit their own name and payment method; role and country stay fixed"""
    authorize(SELF_SERVICE, current_user.role, current_user.country)
    user = UserService(db).update_profile(current_user, profile)
    return Envelope[UserResponse](message="Profile updated successfully", data=_user(user))


@router.patch("/change-password", response_model=Envelope[None])
def change_password(
    passwords: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(SELF_SERVICE, current_user.role, current_user.country)
    UserService(db).change_password(current_user, passwords.current_password, passwords.new_password)
    return Envelope[None](message="Password changed successfully")


@router.delete("/profile/delete", response_model=Envelope[None])
def delete_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(SELF_SERVICE, current_user.role, current_user.country)
    UserService(db).remove(current_user, current_user.id)
    return Envelope[None](message="Account deleted successfully")


@router.get("/{user_id}", response_model=Envelope[UserResponse])
def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(MANAGE_USERS, current_user.role, current_user.country)
    user = UserService(db).get(current_user, user_id)
    return Envelope[UserResponse](message="User retrieved successfully", data=_user(user))


@router.patch("/{user_id}", response_model=Envelope[UserResponse])
def update_user(
    user_id: int,
    update: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(MANAGE_USERS, current_user.role, current_user.country)
    user = UserService(db).update(current_user, user_id, update)
    return Envelope[UserResponse](message="User updated successfully", data=_user(user))


@router.patch("/{user_id}/role", response_model=Envelope[UserResponse])
def update_role(
    user_id: int,
    role_update: RoleUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(ADMIN_ONLY, current_user.role, current_user.country)
    user = UserService(db).update_role(current_user, user_id, role_update.role)
    return Envelope[UserResponse](message="User role updated successfully", data=_user(user))


@router.delete("/{user_id}", response_model=Envelope[None])
def remove_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(ADMIN_ONLY, current_user.role, current_user.country)
    UserService(db).remove(current_user, user_id)
    return Envelope[None](message="User deleted successfully")
