"""Reconciliation of balance movement against the day's ledgers."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cashup.api.deps import get_app_settings, get_reconciliation_service
from cashup.core.config import Settings
from cashup.modules.reconciliation import ReconciliationRun, ReconciliationService
from cashup.modules.snapshots import SnapshotValidationError
from cashup.schemas import BalanceSnapshotRequest, ReconciliationResponse

router = APIRouter()


def _to_response(run: ReconciliationRun, settings: Settings) -> ReconciliationResponse:
    return ReconciliationResponse.from_run(
        run,
        reference_currency=settings.reconciliation.reference_currency,
        local_currency=settings.reconciliation.local_currency,
    )


@router.get("/{day}", response_model=ReconciliationResponse, summary="Reconcile a day")
async def get_reconciliation(
    day: date,
    fx_rate: Optional[str] = Query(default=None, description="SOS per 1 USD"),
    service: ReconciliationService = Depends(get_reconciliation_service),
    settings: Settings = Depends(get_app_settings),
) -> ReconciliationResponse:
    run = await service.run(day, fx_rate)
    return _to_response(run, settings)


@router.post("/{day}/preview", response_model=ReconciliationResponse, summary="Reconcile unsaved balances")
async def preview_reconciliation(
    day: date,
    payload: BalanceSnapshotRequest,
    fx_rate: Optional[str] = Query(default=None, description="SOS per 1 USD"),
    service: ReconciliationService = Depends(get_reconciliation_service),
    settings: Settings = Depends(get_app_settings),
) -> ReconciliationResponse:
    try:
        run = await service.run(day, fx_rate, draft=payload.to_input())
    except SnapshotValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return _to_response(run, settings)
