from fastapi import APIRouter, HTTPException, Request
from starlette import status
from schemas.auth_schemas import CreateUserRequest, LoginRequest, Token, UserResponse
from services.auth_service import AuthService
from services.token_service import TokenService
from utils.deps import storage_dependency, user_dependency
from middleware.rate_limiter import limiter
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/api",
    tags=["auth"]
)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
def register(request: Request, body: CreateUserRequest, storage: storage_dependency):
    user = AuthService.register_user(body, storage)

    logger.info(
        "User registered successfully",
        extra={"user_id": user.id, "username": user.username}
    )

    return user


@router.post("/login", response_model=Token, status_code=status.HTTP_200_OK)
@limiter.limit("5/minute")
def login(request: Request, body: LoginRequest, storage: storage_dependency):
    user = AuthService.authenticate_user(body.username, body.password, storage)

    logger.info(
        "User logged in successfully",
        extra={"user_id": user.id, "username": user.username}
    )

    return TokenService.create_token_response(user.username, user.id)


@router.get("/user", response_model=UserResponse, status_code=status.HTTP_200_OK)
@limiter.limit("30/minute")
def get_user_info(request: Request, user: user_dependency, storage: storage_dependency):
    """
    Current user (protected endpoint).
    """
    model = AuthService.get_user_by_id(storage, user.get("user_id"))

    if not model:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="Could not validate credentials.")

    return model
