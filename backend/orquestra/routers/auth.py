from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..dependencies import get_current_user, get_db
from ..services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/signup", response_model=schemas.SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(request: schemas.SignupRequest, accounts: AuthService = Depends(get_auth_service)):
    """Register and receive a bearer token. Admin accounts cannot be self-registered."""
    return accounts.signup(request)


@router.post("/login", response_model=schemas.LoginResponse)
def login(request: schemas.LoginRequest, accounts: AuthService = Depends(get_auth_service)):
    return accounts.login(request)


@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: models.User = Depends(get_current_user)):
    return current_user
