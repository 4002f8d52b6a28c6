"""Tests for pathwise.core.config_schema."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pathwise.core.config_schema import HouseSettings, LoggingSettings, PathwiseConfig, WithdrawalSettings


class TestHouseSettings:
    def test_defaults(self):
        house = HouseSettings()
        assert house.gift_down_payment == 100_000
        assert house.loan_term_years == 30
        assert house.property_tax_rate == 1.2
        assert house.annual_insurance == 2_400

    def test_term_coerced_from_string(self):
        assert HouseSettings(loan_term_years="15").loan_term_years == 15

    @pytest.mark.parametrize("kwargs", [{"loan_term_years": 20}, {"mortgage_rate": -1}, {"gift_down_payment": -5}])
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(ValidationError):
            HouseSettings(**kwargs)


class TestWithdrawalSettings:
    def test_penalty_bounds(self):
        assert WithdrawalSettings().early_withdrawal_penalty == 10.0
        with pytest.raises(ValidationError):
            WithdrawalSettings(early_withdrawal_penalty=150)


class TestLoggingSettings:
    def test_level_uppercased(self):
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_empty_file_is_none(self):
        assert LoggingSettings(file="").file is None

    def test_file_expands_user(self):
        settings = LoggingSettings(file="~/pathwise.log")
        assert isinstance(settings.file, Path)
        assert "~" not in str(settings.file)


class TestPathwiseConfig:
    def test_sections(self):
        config = PathwiseConfig()
        assert config.house.mortgage_rate == 6.5
        assert config.roadmap.emergency_fund_months == 6
        assert config.withdrawal.expected_return == 7.0

    def test_extra_sections_allowed(self):
        config = PathwiseConfig.model_validate({"custom": {"anything": 1}})
        assert config.model_extra == {"custom": {"anything": 1}}

    def test_round_trips_through_json_dump(self):
        dumped = PathwiseConfig().model_dump(mode="json")
        assert PathwiseConfig.model_validate(dumped) == PathwiseConfig()
