from fastapi import HTTPException
from starlette import status

from schemas.auth_schemas import CreateUserRequest, UserCreate, UserRecord
from storage.base import Storage
from utils.hashing import hash_password, verify_password
from utils.logger import get_logger

logger = get_logger(__name__)


class AuthService:

    @staticmethod
    def register_user(request: CreateUserRequest, storage: Storage) -> UserRecord:
        """
        Creates a user with a bcrypt-hashed password.

        Uniqueness is left to the store: a taken username surfaces as
        ConstraintViolation from storage.create_user.
        """
        user = storage.create_user(UserCreate(
            username=request.username,
            hashed_password=hash_password(request.password)
        ))
        return user

    @staticmethod
    def authenticate_user(username: str, password: str, storage: Storage) -> UserRecord:
        user = storage.get_user_by_username(username)

        if not user:
            logger.warning(
                "Login failed - user not found",
                extra={"username": username}
            )
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                detail="Invalid username or password")

        if not verify_password(password, user.hashed_password):
            logger.warning(
                "Login failed - invalid password",
                extra={"user_id": user.id, "username": username}
            )
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                detail="Invalid username or password")

        logger.debug(
            "User authenticated successfully",
            extra={"user_id": user.id, "username": username}
        )
        return user

    @staticmethod
    def get_user_by_id(storage: Storage, user_id: int) -> UserRecord | None:
        return storage.get_user(user_id)
