from datetime import date
from decimal import Decimal

from cashup.modules.reconciliation import normalize
from cashup.modules.snapshots import BalanceSnapshot

DAY = date(2026, 10, 19)


def _snapshot(**amounts) -> BalanceSnapshot:
    return BalanceSnapshot(balance_date=DAY, **{k: Decimal(v) for k, v in amounts.items()})


def test_local_cash_is_converted_at_the_given_rate():
    totals = normalize(_snapshot(cash_sos="500000", cash_usd="100", evc="30", edahab="20"), Decimal("25000"))

    assert totals.reference_total == Decimal("150")
    assert totals.converted_total == Decimal("20")
    assert totals.overall_total == Decimal("170")
    assert totals.local_total == Decimal("500000")
    assert totals.fx_available


def test_overall_is_reference_plus_converted():
    for snapshot in (
        _snapshot(cash_sos="123456", merchant="9.99"),
        _snapshot(cash_usd="0.01"),
        _snapshot(cash_sos="1", evc="1", edahab="1", merchant="1", cash_usd="1"),
    ):
        totals = normalize(snapshot, "36000")
        assert totals.overall_total == totals.reference_total + totals.converted_total


def test_missing_rate_leaves_local_cash_out():
    snapshot = _snapshot(cash_sos="720000", cash_usd="100")
    for rate in (0, "0", None, "-5", "not a rate"):
        totals = normalize(snapshot, rate)
        assert totals.converted_total == 0
        assert totals.overall_total == Decimal("100")
        assert not totals.fx_available


def test_missing_snapshot_is_all_zeros():
    totals = normalize(None, "36000")

    assert totals.overall_total == 0
    assert totals.reference_total == 0
    assert totals.fx_rate == Decimal("36000")


def test_rate_accepts_thousands_separator():
    totals = normalize(_snapshot(cash_sos="36000"), "36,000")
    assert totals.converted_total == 1


def test_display_rounds_to_each_currency_unit():
    shown = normalize(_snapshot(cash_sos="100000.6", cash_usd="10.005"), "30000").display()

    assert shown["cash_sos"] == Decimal("100001")
    assert shown["cash_usd"] == Decimal("10.01")
    assert str(shown["converted_total"]) == "3.33"
    assert str(shown["overall_total"]) == "13.34"


def test_rate_outside_sane_range_counts_as_missing():
    snapshot = _snapshot(cash_sos="720000", cash_usd="100")
    for rate in ("0.0000000000000000000001", "1e12"):
        totals = normalize(snapshot, rate)
        assert not totals.fx_available
        assert totals.converted_total == 0
        assert totals.overall_total == Decimal("100")
