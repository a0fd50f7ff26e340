import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from edufeedback.auth import jwt_handler
from edufeedback.stores.credential_store import CredentialStore
from edufeedback.stores.dependencies import get_credential_store

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class RegisterResponse(BaseModel):
    message: str
    userId: int


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    access_token: str
    token_type: str = 'bearer'


@router.post('/register', response_model=RegisterResponse)
def register(data: RegisterRequest, store: CredentialStore = Depends(get_credential_store)):
    user_id = store.register(data.name, data.email, data.password, data.role)
    return RegisterResponse(message='User registered successfully', userId=user_id)


@router.post('/login', response_model=LoginResponse)
def login(data: LoginRequest, store: CredentialStore = Depends(get_credential_store)):
    user = store.authenticate(data.email, data.password)
    logger.info('User %s logged in', user.id)

    return LoginResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        access_token=jwt_handler.create_access_token(user.id, user.role),
    )
