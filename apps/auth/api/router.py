from fastapi import APIRouter, Depends
from pydantic import BaseModel
from framework.auth import authenticated
from framework.repository.unit_of_work import UnitOfWork, get_uow
from framework.response import ResponseModel
from framework.security import Identity, TokenCodec, get_token_codec
from apps.users.models import User, UserCreate, UserRead
from ..service import AuthService

router = APIRouter()

class LoginSchema(BaseModel):
    email: str = ""
    password: str = ""

class PhoneLoginSchema(BaseModel):
    phone: str = ""
    password: str = ""

def get_auth_service(
    uow: UnitOfWork = Depends(get_uow),
    codec: TokenCodec = Depends(get_token_codec)
) -> AuthService:
    """Dependency: create AuthService."""
    return AuthService(uow, codec)

def _token_response(user: User, token: str):
    return ResponseModel.success(
        data={
            "access_token": token,
            "token_type": "bearer",
            "user": UserRead.model_validate(user)
        }
    )

@router.post("/register")
async def register(data: UserCreate, service: AuthService = Depends(get_auth_service)):
    """Register with email; returns a token for the new user."""
    user, token = await service.register(data)
    return _token_response(user, token)

@router.post("/login")
async def login(data: LoginSchema, service: AuthService = Depends(get_auth_service)):
    """Login with email and password."""
    user, token = await service.login(data.email, data.password)
    return _token_response(user, token)

@router.post("/login-phone")
async def login_phone(data: PhoneLoginSchema, service: AuthService = Depends(get_auth_service)):
    """Login with phone number and password."""
    user, token = await service.login_phone(data.phone, data.password)
    return _token_response(user, token)

@router.get("/me")
async def me(
    identity: Identity = Depends(authenticated),
    service: AuthService = Depends(get_auth_service)
):
    user = await service.current_user(identity)
    return ResponseModel.success(data=UserRead.model_validate(user))

@router.get("/logout", dependencies=[Depends(authenticated)])
async def logout():
    """Tokens are stateless; the client simply drops its token."""
    return ResponseModel.success(data={})
