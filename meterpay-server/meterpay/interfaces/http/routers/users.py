"""Profile endpoints for the current user."""
from fastapi import APIRouter, Depends

from meterpay.interfaces.http.deps import get_current_user, get_user_service
from meterpay.modules.accounts import ProfileUpdateInput, User, UserService
from meterpay.schemas import ProfileUpdateRequest, UserResponse

router = APIRouter()


@router.get("/profile", response_model=UserResponse, summary="Current user profile")
async def get_profile(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)


@router.put("/profile", response_model=UserResponse, summary="Update the current user profile")
async def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    # only fields present in the body are changed; an explicit null clears one
    changes = {name: getattr(payload, name) for name in payload.model_fields_set}
    updated = await service.update_profile(user.id, ProfileUpdateInput(**changes))
    return UserResponse.model_validate(updated)
