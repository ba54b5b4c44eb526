"""Transaction history and recharge endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from meterpay.interfaces.http.deps import get_current_user, get_recharge_service, get_transaction_service
from meterpay.modules.accounts import User
from meterpay.modules.transactions import RechargeService, TransactionService
from meterpay.schemas import (
    RechargeRequest,
    RechargeResponse,
    TransactionListResponse,
    TransactionResponse,
    TransactionStatsResponse,
)

router = APIRouter()


@router.get("", response_model=TransactionListResponse, summary="List transactions")
async def list_transactions(
    status_filter: Optional[str] = Query(None, alias="status"),
    type_filter: Optional[str] = Query(None, alias="type"),
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResponse:
    rows = await service.list_transactions(
        user.id,
        status=status_filter,
        transaction_type=type_filter,
        limit=limit,
        offset=offset,
    )
    return TransactionListResponse(
        total=len(rows),
        transactions=[TransactionResponse.model_validate(tx) for tx in rows],
    )


@router.get("/recent", response_model=TransactionListResponse, summary="Most recent transactions")
async def recent_transactions(
    limit: int = Query(5, ge=1, le=50),
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResponse:
    rows = await service.recent_transactions(user.id, limit=limit)
    return TransactionListResponse(
        total=len(rows),
        transactions=[TransactionResponse.model_validate(tx) for tx in rows],
    )


@router.get("/stats", response_model=TransactionStatsResponse, summary="Spending summary")
async def transaction_stats(
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionStatsResponse:
    return TransactionStatsResponse.model_validate(await service.stats(user.id))


@router.get("/{transaction_id}", response_model=TransactionResponse, summary="Transaction details")
async def get_transaction(
    transaction_id: str,
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    return TransactionResponse.model_validate(await service.get_transaction(user.id, transaction_id))


@router.post("", response_model=RechargeResponse, status_code=status.HTTP_201_CREATED, summary="Recharge a meter")
async def create_recharge(
    payload: RechargeRequest,
    user: User = Depends(get_current_user),
    service: RechargeService = Depends(get_recharge_service),
) -> RechargeResponse:
    result = await service.create_recharge(
        user_id=user.id,
        meter_number=payload.meter_number,
        amount=payload.amount,
        payment_method=payload.payment_method,
    )
    return RechargeResponse(
        transaction=TransactionResponse.model_validate(result.transaction),
        units_display=service.display_units(result.transaction.amount),
        wallet_balance=result.wallet.balance if result.wallet else None,
    )
