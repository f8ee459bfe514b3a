"""Pydantic schemas used across the project."""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from cashup.modules.ledgers import Cashbook, MovementTotals, SourceResult
from cashup.modules.reconciliation import Deltas, NormalizedTotals, ReconciliationRun
from cashup.modules.snapshots import BalanceSnapshot, SnapshotInput

# operators type amounts like "1,250.50"; parsing happens in the domain layer
AmountInput = Optional[Union[Decimal, str]]


class BalanceSnapshotRequest(BaseModel):
    cash_sos: AmountInput = Field(default=None, description="Cash counted in local currency (SOS)")
    cash_usd: AmountInput = Field(default=None, description="Cash counted in USD")
    evc: AmountInput = None
    edahab: AmountInput = None
    merchant: AmountInput = None
    note: Optional[str] = Field(default=None, max_length=500)

    def to_input(self) -> SnapshotInput:
        return SnapshotInput(
            cash_sos=self.cash_sos,
            cash_usd=self.cash_usd,
            evc=self.evc,
            edahab=self.edahab,
            merchant=self.merchant,
            note=self.note,
        )


class BalanceSnapshotResponse(BaseModel):
    id: Optional[str] = None
    balance_date: date
    cash_sos: Decimal
    cash_usd: Decimal
    evc: Decimal
    edahab: Decimal
    merchant: Decimal
    note: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_domain(cls, snapshot: Optional[BalanceSnapshot]) -> Optional["BalanceSnapshotResponse"]:
        if snapshot is None:
            return None
        return cls.model_validate(snapshot)


class TotalsResponse(BaseModel):
    cash_sos: Decimal
    cash_usd: Decimal
    evc: Decimal
    edahab: Decimal
    merchant: Decimal
    reference_total: Decimal
    converted_total: Decimal
    overall_total: Decimal
    local_total: Decimal
    fx_available: bool

    @classmethod
    def from_domain(cls, totals: NormalizedTotals) -> "TotalsResponse":
        return cls(fx_available=totals.fx_available, **totals.display())


class DeltasResponse(BaseModel):
    channels: dict[str, Decimal]
    reference_total: Decimal
    local_total: Decimal
    overall_total: Decimal

    @classmethod
    def from_domain(cls, deltas: Deltas) -> "DeltasResponse":
        return cls(
            channels={channel.value: value for channel, value in deltas.channels.items()},
            reference_total=deltas.reference_total,
            local_total=deltas.local_total,
            overall_total=deltas.overall_total,
        )


class SourceStatusResponse(BaseModel):
    kind: str
    status: str
    total: Decimal
    record_count: int
    excluded_count: int
    error: Optional[str] = None

    @classmethod
    def from_domain(cls, result: SourceResult) -> "SourceStatusResponse":
        return cls(
            kind=result.kind.value,
            status=result.status.value,
            total=result.total,
            record_count=result.record_count,
            excluded_count=result.excluded_count,
            error=result.error,
        )


class MovementResponse(BaseModel):
    inbound: Decimal
    outbound: Decimal
    net: Decimal
    degraded: bool
    sources: list[SourceStatusResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, movement: MovementTotals) -> "MovementResponse":
        return cls(
            inbound=movement.inbound,
            outbound=movement.outbound,
            net=movement.net,
            degraded=movement.degraded,
            sources=[SourceStatusResponse.from_domain(result) for result in movement.sources],
        )


class ReconciliationResultResponse(BaseModel):
    expected: Decimal
    actual: Decimal
    difference: Decimal
    balanced: bool
    status: str
    tolerance: Decimal


class ReconciliationResponse(BaseModel):
    day: date
    fx_rate: Decimal
    reference_currency: str
    local_currency: str
    status: str
    degraded: bool
    is_draft: bool
    today: Optional[BalanceSnapshotResponse] = None
    previous: Optional[BalanceSnapshotResponse] = None
    current_totals: TotalsResponse
    previous_totals: TotalsResponse
    deltas: DeltasResponse
    movement: MovementResponse
    result: ReconciliationResultResponse
    snapshot_error: Optional[str] = None
    warnings: list[str] = Field(default_factory=list)
    computed_at: datetime

    @classmethod
    def from_run(
        cls,
        run: ReconciliationRun,
        *,
        reference_currency: str = "USD",
        local_currency: str = "SOS",
    ) -> "ReconciliationResponse":
        return cls(
            day=run.day,
            fx_rate=run.fx_rate,
            reference_currency=reference_currency,
            local_currency=local_currency,
            status=run.status.value,
            degraded=run.degraded,
            is_draft=run.is_draft,
            today=BalanceSnapshotResponse.from_domain(run.today),
            previous=BalanceSnapshotResponse.from_domain(run.previous),
            current_totals=TotalsResponse.from_domain(run.current_totals),
            previous_totals=TotalsResponse.from_domain(run.previous_totals),
            deltas=DeltasResponse.from_domain(run.deltas),
            movement=MovementResponse.from_domain(run.movement),
            result=ReconciliationResultResponse(
                expected=run.result.expected,
                actual=run.result.actual,
                difference=run.result.difference,
                balanced=run.result.balanced,
                status=run.result.status.value,
                tolerance=run.result.tolerance,
            ),
            snapshot_error=run.snapshot_error,
            warnings=list(run.warnings),
            computed_at=run.computed_at,
        )


class SaveBalancesResponse(BaseModel):
    message: str
    snapshot: BalanceSnapshotResponse
    reconciliation: ReconciliationResponse


class CashbookLineResponse(BaseModel):
    id: str
    direction: str
    source: str
    amount: Decimal
    title: str
    method: str
    occurred_at: Optional[datetime] = None
    ref: Optional[str] = None


class CashbookResponse(BaseModel):
    day: date
    cash_in: Decimal
    cash_out: Decimal
    net: Decimal
    degraded: bool
    lines: list[CashbookLineResponse] = Field(default_factory=list)
    sources: list[SourceStatusResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, cashbook: Cashbook) -> "CashbookResponse":
        return cls(
            day=cashbook.day,
            cash_in=cashbook.cash_in,
            cash_out=cashbook.cash_out,
            net=cashbook.net,
            degraded=cashbook.degraded,
            lines=[
                CashbookLineResponse(
                    id=line.id,
                    direction=line.direction.value,
                    source=line.source.value,
                    amount=line.amount,
                    title=line.title,
                    method=line.method,
                    occurred_at=line.occurred_at,
                    ref=line.ref,
                )
                for line in cashbook.lines
            ],
            sources=[SourceStatusResponse.from_domain(result) for result in cashbook.sources],
        )


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
