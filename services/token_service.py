from datetime import datetime, timezone, timedelta
from fastapi import HTTPException, status
from jose import jwt, JWTError
from core.config import settings


class TokenService:
    """
    Issues and decodes JWT access tokens.
    """

    @staticmethod
    def create_access_token(username: str, user_id: int, expires_delta: timedelta = None) -> str:
        """
        Args:
            username: Becomes the "sub" claim
            user_id: User's ID
            expires_delta: Lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        payload = {
            "sub": username,
            "id": user_id,
            "type": "access",
            "exp": datetime.now(timezone.utc) + expires_delta
        }

        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def create_token_response(username: str, user_id: int) -> dict:
        return {
            "access_token": TokenService.create_access_token(username, user_id),
            "token_type": "bearer"
        }

    @staticmethod
    def decode_access_token(token: str) -> dict:
        """
        Returns {"username", "user_id"} for a valid access token.

        Raises:
            HTTPException 401: bad signature, expired, wrong type or missing claims
        """
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                detail="Could not validate credentials.")

        username = payload.get("sub")
        user_id = payload.get("id")

        if username is None or user_id is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                detail="Could not validate credentials.")

        if payload.get("type") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                detail="Invalid token type. Access token required.")

        return {"username": username, "user_id": user_id}
