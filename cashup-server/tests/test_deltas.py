from datetime import date
from decimal import Decimal

import pytest

from cashup.modules.reconciliation import diff, normalize
from cashup.modules.snapshots import ALL_CHANNELS, BalanceSnapshot, Channel

DAY = date(2026, 10, 19)

TODAY = BalanceSnapshot(
    balance_date=DAY,
    cash_sos=Decimal("720000"),
    cash_usd=Decimal("352.50"),
    evc=Decimal("120.50"),
    edahab=Decimal("40"),
)
YESTERDAY = BalanceSnapshot(
    balance_date=date(2026, 10, 18),
    cash_sos=Decimal("684000"),
    cash_usd=Decimal("310"),
    evc=Decimal("120.50"),
    edahab=Decimal("40"),
    merchant=Decimal("5"),
)


def test_same_snapshot_has_no_movement():
    totals = normalize(TODAY, "36000")
    deltas = diff(totals, totals)

    assert all(deltas.channel(channel) == 0 for channel in ALL_CHANNELS)
    assert deltas.reference_total == 0
    assert deltas.local_total == 0
    assert deltas.overall_total == 0


def test_channel_and_total_deltas():
    deltas = diff(normalize(TODAY, "36000"), normalize(YESTERDAY, "36000"))

    assert deltas.channel(Channel.CASH_SOS) == Decimal("36000")
    assert deltas.channel(Channel.CASH_USD) == Decimal("42.50")
    assert deltas.channel(Channel.MERCHANT) == Decimal("-5.00")
    assert deltas.reference_total == Decimal("37.50")
    assert deltas.local_total == Decimal("36000")
    assert deltas.overall_total == Decimal("38.50")


def test_no_previous_snapshot_means_zero_baseline():
    current = normalize(TODAY, "36000")
    deltas = diff(current, None)

    assert deltas.channel(Channel.CASH_USD) == Decimal("352.50")
    assert deltas.channel(Channel.CASH_SOS) == Decimal("720000")
    assert deltas.overall_total == Decimal("533.00")


def test_local_channel_rounds_to_whole_units():
    current = normalize(BalanceSnapshot(balance_date=DAY, cash_sos=Decimal("1000.4")), "36000")
    deltas = diff(current, None)

    assert str(deltas.channel(Channel.CASH_SOS)) == "1000"
    assert str(deltas.channel(Channel.EVC)) == "0.00"


def test_deltas_cannot_be_changed_after_the_fact():
    deltas = diff(normalize(TODAY, "36000"), None)

    with pytest.raises(TypeError):
        deltas.channels[Channel.CASH_USD] = Decimal("0")
