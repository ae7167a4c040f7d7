"""
Authentication endpoints.

- POST /auth/token: exchange username/password for a JWT
- POST /auth/register: create a (non-admin) account and get a JWT
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import TokenResponse, UserAuthRequest, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def get_token(request: UserAuthRequest, db: Session = Depends(get_db)):
    """
    Authenticate and return a JWT.

    Returns 401 for an unknown username and for a wrong password alike.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    return TokenResponse(token=create_token(user))


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account and return a JWT for immediate use.

    Self-registered users are never admins.
    """
    data = request.model_dump(by_alias=True)
    data["isAdmin"] = False
    user = user_crud.register(db, data)
    logger.info(f"New user registered: {user['username']}")
    return TokenResponse(token=create_token(user))
