from fastapi import APIRouter

from meterpay.interfaces.http.routers import auth, debts, meters, notifications, transactions, users, wallet


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(users.router, prefix="/user", tags=["user"])
    router.include_router(meters.router, prefix="/meters", tags=["meters"])
    router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
    router.include_router(debts.router, prefix="/debts", tags=["debts"])
    router.include_router(wallet.router, prefix="/wallet", tags=["wallet"])
    router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
    return router


__all__ = [
    "create_api_router",
]
