"""Daily cashbook: every cash-in and cash-out line behind the expected movement."""
from datetime import date

from fastapi import APIRouter, Depends

from cashup.api.deps import get_ledger_aggregator
from cashup.modules.ledgers import LedgerAggregator
from cashup.schemas import CashbookResponse

router = APIRouter()


@router.get("/{day}", response_model=CashbookResponse, summary="List the day's cash movements")
async def get_cashbook(
    day: date,
    aggregator: LedgerAggregator = Depends(get_ledger_aggregator),
) -> CashbookResponse:
    cashbook = await aggregator.cashbook_for_day(day)
    return CashbookResponse.from_domain(cashbook)
