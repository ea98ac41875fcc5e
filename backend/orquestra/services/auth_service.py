import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..auth import authenticate, create_access_token, hash_password
from ..exceptions import AuthenticationError, ValidationFailedError
from ..schemas import LoginRequest, LoginResponse, SignupRequest, SignupResponse, UserResponse

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"
BAD_CREDENTIALS = "Incorrect email or password"


class AuthService:
    """Account registration and login."""

    def __init__(self, db: Session):
        self.db = db

    def email_taken(self, email: str) -> bool:
        return self.db.query(models.User.id).filter(models.User.email == email).first() is not None

    def signup(self, request: SignupRequest) -> SignupResponse:
        """
        Register an account and sign the caller in.

        Raises:
            ValidationFailedError: the email is already registered
        """
        if self.email_taken(request.email):
            raise ValidationFailedError({"email": EMAIL_TAKEN}, details=EMAIL_TAKEN)

        user = models.User(
            name=request.name,
            email=request.email,
            password_hash=hash_password(request.password),
            role=request.role,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            self.db.rollback()
            raise ValidationFailedError({"email": EMAIL_TAKEN}, details=EMAIL_TAKEN)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to create account for {request.email}")
            raise
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} with role {user.role}")
        return SignupResponse(**self._session_for(user))

    def login(self, request: LoginRequest) -> LoginResponse:
        user = authenticate(self.db, request.email, request.password)
        if user is None:
            logger.info(f"Failed login for {request.email}")
            raise AuthenticationError(BAD_CREDENTIALS)
        return LoginResponse(**self._session_for(user))

    @staticmethod
    def _session_for(user: models.User) -> dict:
        return {
            "user": UserResponse.model_validate(user),
            "access_token": create_access_token(user.id, user.role),
            "token_type": "bearer",
        }
