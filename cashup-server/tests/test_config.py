from decimal import Decimal

import pytest
from pydantic import ValidationError

from cashup.core.config import ReconciliationSettings, Settings


def test_defaults_match_the_shop():
    settings = Settings(_env_file=None)

    assert settings.reconciliation.timezone == "Africa/Mogadishu"
    assert settings.default_fx_rate == Decimal("36000")
    assert settings.reconciliation.credit_tokens == ["credit", "deyn"]
    assert settings.tz.key == "Africa/Mogadishu"


def test_nested_environment_overrides(monkeypatch):
    monkeypatch.setenv("RECONCILIATION__DEFAULT_FX_RATE", "25000")
    monkeypatch.setenv("RECONCILIATION__TIMEZONE", "Europe/London")

    settings = Settings(_env_file=None)

    assert settings.default_fx_rate == Decimal("25000")
    assert settings.tz.key == "Europe/London"


def test_credit_tokens_are_cleaned():
    section = ReconciliationSettings(credit_tokens=["  Loan ", "", "DEYN"])
    assert section.credit_tokens == ["loan", "deyn"]


def test_empty_credit_tokens_rejected():
    with pytest.raises(ValidationError):
        ReconciliationSettings(credit_tokens=[" "])


def test_unknown_timezone_rejected():
    with pytest.raises(ValidationError):
        ReconciliationSettings(timezone="Mars/Olympus_Mons")
