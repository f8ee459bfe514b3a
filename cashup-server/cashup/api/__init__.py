from fastapi import APIRouter

from cashup.api.routers import balances, cashbook, reconciliation


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(balances.router, prefix="/balances", tags=["balances"])
    router.include_router(reconciliation.router, prefix="/reconciliation", tags=["reconciliation"])
    router.include_router(cashbook.router, prefix="/cashbook", tags=["cashbook"])
    return router


__all__ = [
    "create_api_router",
]
