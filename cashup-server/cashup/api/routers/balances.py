"""Night cash-up: read and record the day's closing balances."""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cashup.api.deps import get_app_settings, get_reconciliation_service, get_snapshot_service
from cashup.core.config import Settings
from cashup.modules.reconciliation import ReconciliationService
from cashup.modules.snapshots import (
    SnapshotService,
    SnapshotStoreError,
    SnapshotStoreMissingError,
    SnapshotValidationError,
)
from cashup.schemas import (
    BalanceSnapshotRequest,
    BalanceSnapshotResponse,
    ReconciliationResponse,
    SaveBalancesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def raise_for_store_error(exc: SnapshotStoreError) -> None:
    if isinstance(exc, SnapshotStoreMissingError):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("/{day}", response_model=BalanceSnapshotResponse, summary="Get the balances recorded for a day")
async def get_balances(
    day: date,
    service: SnapshotService = Depends(get_snapshot_service),
) -> BalanceSnapshotResponse:
    try:
        snapshot = await service.get_for_day(day)
    except SnapshotStoreError as exc:
        raise_for_store_error(exc)
    if snapshot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No balances recorded for {day.isoformat()}")
    return BalanceSnapshotResponse.from_domain(snapshot)


@router.put("/{day}", response_model=SaveBalancesResponse, summary="Record or overwrite the balances for a day")
async def save_balances(
    day: date,
    payload: BalanceSnapshotRequest,
    fx_rate: Optional[str] = Query(default=None, description="SOS per 1 USD"),
    service: ReconciliationService = Depends(get_reconciliation_service),
    settings: Settings = Depends(get_app_settings),
) -> SaveBalancesResponse:
    try:
        snapshot, run = await service.save_and_rerun(day, payload.to_input(), fx_rate)
    except SnapshotValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except SnapshotStoreError as exc:
        logger.error("Saving balances for %s failed: %s", day.isoformat(), exc)
        raise_for_store_error(exc)

    return SaveBalancesResponse(
        message="Saved. Now check the difference and reconciliation below.",
        snapshot=BalanceSnapshotResponse.from_domain(snapshot),
        reconciliation=ReconciliationResponse.from_run(
            run,
            reference_currency=settings.reconciliation.reference_currency,
            local_currency=settings.reconciliation.local_currency,
        ),
    )
