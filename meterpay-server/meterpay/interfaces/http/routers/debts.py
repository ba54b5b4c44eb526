"""Outstanding bill endpoints."""
from fastapi import APIRouter, Depends, Query

from meterpay.interfaces.http.deps import get_current_user, get_debt_service
from meterpay.modules.accounts import User
from meterpay.modules.common.money import from_cents
from meterpay.modules.debts import DebtService
from meterpay.schemas import (
    DebtListResponse,
    DebtPaymentRequest,
    DebtPaymentResponse,
    DebtResponse,
    TransactionResponse,
)

router = APIRouter()


@router.get("", response_model=DebtListResponse, summary="List debts")
async def list_debts(
    include_paid: bool = Query(True),
    user: User = Depends(get_current_user),
    service: DebtService = Depends(get_debt_service),
) -> DebtListResponse:
    debts = await service.list_debts(user.id, include_paid=include_paid)
    total_due = sum(debt.amount_cents for debt in debts if not debt.is_paid)
    return DebtListResponse(
        total=len(debts),
        total_due=from_cents(total_due),
        debts=[DebtResponse.model_validate(debt) for debt in debts],
    )


@router.get("/{debt_id}", response_model=DebtResponse, summary="Debt details")
async def get_debt(
    debt_id: str,
    user: User = Depends(get_current_user),
    service: DebtService = Depends(get_debt_service),
) -> DebtResponse:
    return DebtResponse.model_validate(await service.get_debt(user.id, debt_id))


@router.post("/{debt_id}/pay", response_model=DebtPaymentResponse, summary="Pay a debt")
async def pay_debt(
    debt_id: str,
    payload: DebtPaymentRequest,
    user: User = Depends(get_current_user),
    service: DebtService = Depends(get_debt_service),
) -> DebtPaymentResponse:
    payment = await service.pay_debt(user.id, debt_id, payload.payment_method)
    return DebtPaymentResponse(
        debt=DebtResponse.model_validate(payment.debt),
        transaction=TransactionResponse.model_validate(payment.transaction),
        wallet_balance=payment.wallet.balance if payment.wallet else None,
    )
