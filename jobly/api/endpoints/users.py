"""
User endpoints.

Listing and creating users is for admins; everything under
/users/{username} is for that user or an admin.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import CurrentUser, get_admin_or_self, get_admin_user
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    ApplicationResponse,
    UserCreateRequest,
    UserCreateResponse,
    UserDeletedResponse,
    UserDetailEnvelope,
    UserEnvelope,
    UserListResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user),
):
    """
    Add a new user. Not the registration endpoint: admins use this to add
    users, who may themselves be admins.

    Returns the new user and an authentication token for them.
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    logger.info(f"Admin {admin_user.username} created user {user['username']}")
    return {"user": user, "token": create_token(user)}


@router.get("", response_model=UserListResponse)
def list_users(
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user),
):
    """List all users."""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_admin_or_self),
):
    """Get a user, including the ids of the jobs they applied to."""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_admin_or_self),
):
    """
    Update a user. Data can include { firstName, lastName, password, email }.
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"user": user_crud.update(db, username, data)}


@router.delete("/{username}", response_model=UserDeletedResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_admin_or_self),
):
    """Delete a user."""
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", response_model=ApplicationResponse)
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_admin_or_self),
):
    """Apply the user to a job."""
    user_crud.apply_to_job(db, username, job_id)
    return {"applied": job_id}
