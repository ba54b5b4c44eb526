"""Pydantic schemas used across the project.

Amounts travel as two-place decimals. Request amounts are accepted loosely and
checked by the shared validators, so a malformed amount is reported with the
offending field instead of a generic 422.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from meterpay.modules.notifications.schedule import Schedule


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = Field(default=None, validation_alias=_alias("full_name", "fullName"))
    email: Optional[str] = None


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: str
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    wallet_balance: Decimal
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    full_name: Optional[str] = Field(default=None, validation_alias=_alias("full_name", "fullName"))
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class MeterResponse(BaseModel):
    id: str
    meter_number: str
    nickname: Optional[str] = None
    address: Optional[str] = None
    customer_name: Optional[str] = None
    type: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MeterListResponse(BaseModel):
    total: int
    meters: list[MeterResponse]


class MeterCreateRequest(BaseModel):
    meter_number: str = Field(..., validation_alias=_alias("meter_number", "meterNumber"))
    nickname: Optional[str] = None
    address: Optional[str] = None
    customer_name: Optional[str] = Field(default=None, validation_alias=_alias("customer_name", "customerName"))
    type: Optional[str] = None
    status: Optional[str] = None


class MeterUpdateRequest(BaseModel):
    nickname: Optional[str] = None
    address: Optional[str] = None
    customer_name: Optional[str] = Field(default=None, validation_alias=_alias("customer_name", "customerName"))
    type: Optional[str] = None
    status: Optional[str] = None


class TransactionResponse(BaseModel):
    id: str
    meter_number: Optional[str] = None
    amount: Decimal
    total: Decimal
    status: str
    payment_method: str
    transaction_type: str
    reference: Optional[str] = None
    token: Optional[str] = None
    units: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransactionListResponse(BaseModel):
    total: int
    transactions: list[TransactionResponse]


class TransactionStatsResponse(BaseModel):
    total_amount: Decimal
    total_count: int
    success_count: int
    average_amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class RechargeRequest(BaseModel):
    meter_number: str = Field(..., validation_alias=_alias("meter_number", "meterNumber"))
    amount: Any
    payment_method: str = Field(..., validation_alias=_alias("payment_method", "paymentMethod"))


class RechargeResponse(BaseModel):
    transaction: TransactionResponse
    units_display: Optional[str] = None
    wallet_balance: Optional[Decimal] = None


class DebtResponse(BaseModel):
    id: str
    meter_number: str
    amount: Decimal
    category: str
    due_date: datetime
    description: Optional[str] = None
    is_paid: bool
    status: str
    paid_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class DebtListResponse(BaseModel):
    total: int
    total_due: Decimal
    debts: list[DebtResponse]


class DebtPaymentRequest(BaseModel):
    payment_method: str = Field(..., validation_alias=_alias("payment_method", "paymentMethod"))


class DebtPaymentResponse(BaseModel):
    debt: DebtResponse
    transaction: TransactionResponse
    wallet_balance: Optional[Decimal] = None


class WalletSnapshotResponse(BaseModel):
    balance: Decimal
    currency: str


class WalletEntryResponse(BaseModel):
    id: str
    amount: Decimal
    type: str
    description: Optional[str] = None
    reference: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WalletEntryListResponse(BaseModel):
    total: int
    transactions: list[WalletEntryResponse]


class AddFundsRequest(BaseModel):
    amount: Any
    payment_method: str = Field(default="card", validation_alias=_alias("payment_method", "paymentMethod"))


class AddFundsResponse(BaseModel):
    balance: Decimal
    transaction: TransactionResponse


class ScheduleModel(BaseModel):
    type: str
    time: str
    days: Optional[list[int]] = None
    date: Optional[int] = None
    next_trigger_date: Optional[str] = Field(
        default=None,
        validation_alias=_alias("next_trigger_date", "nextTriggerDate"),
    )

    model_config = ConfigDict(from_attributes=True)

    def to_domain(self) -> Schedule:
        return Schedule(
            type=self.type,
            time=self.time,
            days=tuple(self.days) if self.days is not None else None,
            date=self.date,
            next_trigger_date=self.next_trigger_date or None,
        )


class NotificationTemplateResponse(BaseModel):
    id: str
    name: str
    type: str
    title: str
    body: str
    description: str
    can_be_scheduled: bool
    personalization_fields: list[str]
    default_schedule: Optional[ScheduleModel] = None

    model_config = ConfigDict(from_attributes=True)


class NotificationTemplateListResponse(BaseModel):
    templates: list[NotificationTemplateResponse]


class ScheduledNotificationCreateRequest(BaseModel):
    template_id: str = Field(..., validation_alias=_alias("template_id", "templateId"))
    schedule: ScheduleModel
    personalizations: dict[str, str] = Field(default_factory=dict)


class ScheduledNotificationUpdateRequest(BaseModel):
    schedule: Optional[ScheduleModel] = None
    personalizations: Optional[dict[str, str]] = None
    enabled: Optional[bool] = None


class ScheduledNotificationResponse(BaseModel):
    id: str
    template_id: str
    schedule: ScheduleModel
    personalizations: dict[str, str]
    enabled: bool
    schedule_text: str
    title: str
    body: str
    next_trigger_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ScheduledNotificationListResponse(BaseModel):
    total: int
    notifications: list[ScheduledNotificationResponse]


class ErrorResponse(BaseModel):
    error: str
    detail: str
    field: Optional[str] = None
