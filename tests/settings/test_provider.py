from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.settings.provider import SettingsConfigProvider, parse_setting_value

from tests.fakes import FakeSettings


def test_parse_setting_value_types():
    assert parse_setting_value("10") == 10
    assert parse_setting_value(" 12 ") == 12
    assert parse_setting_value("12.5") == Decimal("12.5")
    assert parse_setting_value("monthly") == "monthly"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_parse_setting_value_rejects_empty(raw):
    with pytest.raises(ValueError):
        parse_setting_value(raw)


def test_provider_reads_fresh_values():
    repo = FakeSettings({"tds_percentage": "10"})
    provider = SettingsConfigProvider(repo)

    assert provider.get("tds_percentage", 5) == 10
    repo.values["tds_percentage"] = "12"
    assert provider.get("tds_percentage", 5) == 12


def test_provider_defaults_when_missing_empty_or_failing():
    repo = FakeSettings({"max_allowed_leaves": ""})
    provider = SettingsConfigProvider(repo)

    assert provider.get("tds_percentage", 10) == 10
    assert provider.get("max_allowed_leaves", 2) == 2

    repo.fail = True
    assert provider.get("working_days_per_month", 30) == 30
