from typing import Annotated
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from services.token_service import TokenService
from storage import Storage, get_storage

storage_dependency = Annotated[Storage, Depends(get_storage)]

oauth2_bearer = OAuth2PasswordBearer(tokenUrl="api/login")


def get_current_user(token: Annotated[str, Depends(oauth2_bearer)]):
    return TokenService.decode_access_token(token)


user_dependency = Annotated[dict, Depends(get_current_user)]
