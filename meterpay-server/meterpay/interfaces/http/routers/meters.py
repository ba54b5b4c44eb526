"""Meter management endpoints."""
from fastapi import APIRouter, Depends, Query, Response, status

from meterpay.interfaces.http.deps import get_current_user, get_meter_service
from meterpay.modules.accounts import User
from meterpay.modules.meters import MeterService, MeterUpdateInput
from meterpay.schemas import MeterCreateRequest, MeterListResponse, MeterResponse, MeterUpdateRequest

router = APIRouter()


@router.get("", response_model=MeterListResponse, summary="List the user's meters")
async def list_meters(
    user: User = Depends(get_current_user),
    service: MeterService = Depends(get_meter_service),
) -> MeterListResponse:
    meters = await service.list_meters(user.id)
    return MeterListResponse(total=len(meters), meters=[MeterResponse.model_validate(m) for m in meters])


@router.get("/recent", response_model=MeterListResponse, summary="Most recently added meters")
async def recent_meters(
    limit: int = Query(5, ge=1, le=50),
    user: User = Depends(get_current_user),
    service: MeterService = Depends(get_meter_service),
) -> MeterListResponse:
    meters = await service.recent_meters(user.id, limit=limit)
    return MeterListResponse(total=len(meters), meters=[MeterResponse.model_validate(m) for m in meters])


@router.get("/{meter_id}", response_model=MeterResponse, summary="Meter details")
async def get_meter(
    meter_id: str,
    user: User = Depends(get_current_user),
    service: MeterService = Depends(get_meter_service),
) -> MeterResponse:
    return MeterResponse.model_validate(await service.get_meter(user.id, meter_id))


@router.post("", response_model=MeterResponse, status_code=status.HTTP_201_CREATED, summary="Add a meter")
async def add_meter(
    payload: MeterCreateRequest,
    response: Response,
    user: User = Depends(get_current_user),
    service: MeterService = Depends(get_meter_service),
) -> MeterResponse:
    meter, created = await service.add_meter(
        user.id,
        payload.meter_number,
        nickname=payload.nickname,
        address=payload.address,
        customer_name=payload.customer_name,
        type=payload.type,
        status=payload.status,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return MeterResponse.model_validate(meter)


@router.put("/{meter_id}", response_model=MeterResponse, summary="Update meter details")
async def update_meter(
    meter_id: str,
    payload: MeterUpdateRequest,
    user: User = Depends(get_current_user),
    service: MeterService = Depends(get_meter_service),
) -> MeterResponse:
    changes = {name: getattr(payload, name) for name in payload.model_fields_set}
    meter = await service.update_meter(user.id, meter_id, MeterUpdateInput(**changes))
    return MeterResponse.model_validate(meter)
