"""Registration and login endpoints."""
from fastapi import APIRouter, Depends, status

from meterpay.core.security import create_access_token
from meterpay.interfaces.http.deps import get_user_service
from meterpay.modules.accounts import User, UserService
from meterpay.schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse

router = APIRouter()


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, user.username),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED, summary="Register an account")
async def register(
    payload: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    user = await service.register(
        username=payload.username,
        password=payload.password,
        full_name=payload.full_name,
        email=payload.email,
    )
    return _token_response(user)


@router.post("/login", response_model=TokenResponse, summary="Log in and receive a bearer token")
async def login(
    payload: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    user = await service.authenticate(payload.username, payload.password)
    return _token_response(user)
