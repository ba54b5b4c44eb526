"""Notification templates and scheduled notification endpoints."""
from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends, status

from meterpay.interfaces.http.deps import get_clock, get_current_user, get_notification_service
from meterpay.modules.accounts import User
from meterpay.modules.notifications import NotificationPreview, ScheduledNotificationService
from meterpay.schemas import (
    NotificationTemplateListResponse,
    NotificationTemplateResponse,
    ScheduledNotificationCreateRequest,
    ScheduledNotificationListResponse,
    ScheduledNotificationResponse,
    ScheduledNotificationUpdateRequest,
    ScheduleModel,
)

router = APIRouter()


def _to_response(preview: NotificationPreview) -> ScheduledNotificationResponse:
    notification = preview.notification
    return ScheduledNotificationResponse(
        id=notification.id,
        template_id=notification.template_id,
        schedule=ScheduleModel.model_validate(notification.schedule),
        personalizations=notification.personalizations,
        enabled=notification.enabled,
        schedule_text=preview.schedule_text,
        title=preview.title,
        body=preview.body,
        next_trigger_at=preview.next_trigger_at,
        created_at=notification.created_at,
        updated_at=notification.updated_at,
    )


@router.get("/templates", response_model=NotificationTemplateListResponse, summary="Notification templates")
async def list_templates() -> NotificationTemplateListResponse:
    templates = ScheduledNotificationService.list_templates()
    return NotificationTemplateListResponse(
        templates=[NotificationTemplateResponse.model_validate(template) for template in templates]
    )


@router.get("/scheduled", response_model=ScheduledNotificationListResponse, summary="Scheduled notifications")
async def list_scheduled(
    user: User = Depends(get_current_user),
    service: ScheduledNotificationService = Depends(get_notification_service),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ScheduledNotificationListResponse:
    now = clock()
    items = [_to_response(service.describe(n, now)) for n in await service.list(user.id)]
    return ScheduledNotificationListResponse(total=len(items), notifications=items)


@router.post(
    "/scheduled",
    response_model=ScheduledNotificationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a notification",
)
async def create_scheduled(
    payload: ScheduledNotificationCreateRequest,
    user: User = Depends(get_current_user),
    service: ScheduledNotificationService = Depends(get_notification_service),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ScheduledNotificationResponse:
    notification = await service.create(
        user_id=user.id,
        template_id=payload.template_id,
        schedule=payload.schedule.to_domain(),
        personalizations=payload.personalizations,
    )
    return _to_response(service.describe(notification, clock()))


@router.get("/scheduled/{notification_id}", response_model=ScheduledNotificationResponse, summary="Scheduled notification")
async def get_scheduled(
    notification_id: str,
    user: User = Depends(get_current_user),
    service: ScheduledNotificationService = Depends(get_notification_service),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ScheduledNotificationResponse:
    notification = await service.get(user.id, notification_id)
    return _to_response(service.describe(notification, clock()))


@router.patch("/scheduled/{notification_id}", response_model=ScheduledNotificationResponse, summary="Update a schedule")
async def update_scheduled(
    notification_id: str,
    payload: ScheduledNotificationUpdateRequest,
    user: User = Depends(get_current_user),
    service: ScheduledNotificationService = Depends(get_notification_service),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ScheduledNotificationResponse:
    notification = await service.update(
        user.id,
        notification_id,
        schedule=payload.schedule.to_domain() if payload.schedule else None,
        personalizations=payload.personalizations,
        enabled=payload.enabled,
    )
    return _to_response(service.describe(notification, clock()))


@router.post(
    "/scheduled/{notification_id}/toggle",
    response_model=ScheduledNotificationResponse,
    summary="Enable or disable a schedule",
)
async def toggle_scheduled(
    notification_id: str,
    user: User = Depends(get_current_user),
    service: ScheduledNotificationService = Depends(get_notification_service),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ScheduledNotificationResponse:
    notification = await service.toggle(user.id, notification_id)
    return _to_response(service.describe(notification, clock()))


@router.delete("/scheduled/{notification_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a schedule")
async def delete_scheduled(
    notification_id: str,
    user: User = Depends(get_current_user),
    service: ScheduledNotificationService = Depends(get_notification_service),
) -> None:
    await service.delete(user.id, notification_id)
