"""Wallet balance, ledger and top-up endpoints."""
from fastapi import APIRouter, Depends, Query, status

from meterpay.core.container import ApplicationContainer
from meterpay.interfaces.http.deps import (
    get_app_container,
    get_current_user,
    get_recharge_service,
    get_wallet_service,
)
from meterpay.modules.accounts import User
from meterpay.modules.transactions import RechargeService
from meterpay.modules.wallets import WalletService
from meterpay.schemas import (
    AddFundsRequest,
    AddFundsResponse,
    TransactionResponse,
    WalletEntryListResponse,
    WalletEntryResponse,
    WalletSnapshotResponse,
)

router = APIRouter()


@router.get("", response_model=WalletSnapshotResponse, summary="Wallet balance")
async def wallet_balance(
    user: User = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service),
    container: ApplicationContainer = Depends(get_app_container),
) -> WalletSnapshotResponse:
    snapshot = await service.get_snapshot(user.id)
    return WalletSnapshotResponse(balance=snapshot.balance, currency=container.settings.tariff.currency)


@router.get("/transactions", response_model=WalletEntryListResponse, summary="Wallet ledger")
async def wallet_transactions(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service),
) -> WalletEntryListResponse:
    entries = await service.list_entries(user.id, limit=limit, offset=offset)
    return WalletEntryListResponse(
        total=len(entries),
        transactions=[WalletEntryResponse.model_validate(entry) for entry in entries],
    )


@router.post("/add-funds", response_model=AddFundsResponse, status_code=status.HTTP_201_CREATED, summary="Top up the wallet")
async def add_funds(
    payload: AddFundsRequest,
    user: User = Depends(get_current_user),
    service: RechargeService = Depends(get_recharge_service),
) -> AddFundsResponse:
    result = await service.add_funds(user_id=user.id, amount=payload.amount, payment_method=payload.payment_method)
    return AddFundsResponse(
        balance=result.wallet.balance,
        transaction=TransactionResponse.model_validate(result.transaction),
    )
