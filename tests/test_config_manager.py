import json
from datetime import date, time
from decimal import Decimal

import pytest

from derivrecon.common.validation import ConfigurationError
from derivrecon.dtcc_recon import CutoffPolicy
from derivrecon.unified_recon.config import ReconConfigManager


@pytest.fixture
def config_manager():
    return ReconConfigManager()


def test_defaults_from_bundled_file(config_manager, business_date):
    run_config = config_manager.build_run_config(business_date)

    assert run_config.business_date == business_date
    assert run_config.tolerance == Decimal("0")
    assert run_config.dtcc_settings.cutoff_time == time(18, 34)
    assert run_config.dtcc_settings.cutoff_policy == CutoffPolicy.EXCLUDE
    assert run_config.dtcc_settings.eligible_participants == frozenset({"0250", "0141"})
    assert run_config.cls_settings.rate_type == "NEW_YORK"
    assert run_config.occ_settings.cmo_code == "WFCSLLC"


def test_business_date_required(config_manager):
    with pytest.raises(ConfigurationError):
        config_manager.build_run_config()


def test_nested_overrides_merge(config_manager, business_date):
    run_config = config_manager.build_run_config(
        business_date,
        {"tolerance": "0.01", "dtcc": {"cutoff_policy": "zero_fill"}},
    )

    assert run_config.tolerance == Decimal("0.01")
    assert run_config.dtcc_settings.cutoff_policy == CutoffPolicy.ZERO_FILL
    # Untouched keys keep the file value
    assert run_config.dtcc_settings.cutoff_time == time(18, 34)


@pytest.mark.parametrize(
    "overrides",
    [
        {"tolerance": "-1"},
        {"dtcc": {"cutoff_policy": "sometimes"}},
        {"max_workers": 0},
        {"cls": {"source_currency": "CANADIAN"}},
    ],
)
def test_malformed_settings_rejected(config_manager, business_date, overrides):
    with pytest.raises(ConfigurationError):
        config_manager.build_run_config(business_date, overrides)


def test_business_date_from_file(tmp_path):
    config_path = tmp_path / "recon.json"
    config_path.write_text(json.dumps({"business_date": "2024-01-02"}))

    run_config = ReconConfigManager(config_path).build_run_config()

    assert run_config.business_date == date(2024, 1, 2)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ReconConfigManager(tmp_path / "nope.json")


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_unreadable_config_file(tmp_path, content):
    config_path = tmp_path / "recon.json"
    config_path.write_text(content)

    with pytest.raises(ConfigurationError):
        ReconConfigManager(config_path)


def test_run_config_is_frozen(config_manager, business_date):
    run_config = config_manager.build_run_config(business_date)

    with pytest.raises(Exception):
        run_config.tolerance = Decimal("1")
