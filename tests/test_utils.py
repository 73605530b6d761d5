from decimal import Decimal

import pytest

from derivrecon.common.models import SourceSystem
from derivrecon.common.utils import (
    is_missing,
    normalize_participant_id,
    parse_decimal,
    safe_decimal,
    safe_str,
    to_cents,
)
from derivrecon.common.validation import RateNotFound, UnresolvedParticipant
from derivrecon.unified_recon.core import Reconciler
from derivrecon.unified_recon.models import SanitizedTotal, SourceTotal
from derivrecon.unified_recon.utils import create_summary_dataframe, summary_to_records

from conftest import BUSINESS_DATE


@pytest.mark.parametrize("value", [None, "", "   ", float("nan"), Decimal("NaN")])
def test_missing_values(value):
    assert is_missing(value)


def test_safe_decimal():
    assert safe_decimal("1,234.50") == Decimal("1234.50")
    assert safe_decimal(0.1) == Decimal("0.1")
    assert safe_decimal("abc") is None
    assert safe_decimal("", default=Decimal("0")) == Decimal("0")


def test_parse_decimal_separates_absent_from_corrupt():
    assert parse_decimal("1,234.50") == Decimal("1234.50")
    assert parse_decimal(7) == Decimal("7")
    assert parse_decimal("  ") is None
    assert parse_decimal(float("nan")) is None
    for corrupt in ("12O.00", "abc", "Infinity"):
        with pytest.raises(ValueError, match="Unparseable amount"):
            parse_decimal(corrupt)


def test_safe_str_drops_float_suffix():
    assert safe_str(141.0) == "141"
    assert safe_str(" WFCSLLC ") == "WFCSLLC"


def test_to_cents_rounds_half_up():
    assert to_cents(Decimal("364.995")) == Decimal("365.00")
    assert to_cents(Decimal("-0.005")) == Decimal("-0.01")


def test_participant_ids():
    assert normalize_participant_id(250) == "0250"
    assert normalize_participant_id("ABCD") == "ABCD"


def test_source_tag_lookup():
    assert SourceSystem.from_tag(" occ ") == SourceSystem.OCC
    with pytest.raises(ValueError):
        SourceSystem.from_tag("LCH")


def test_source_tag_lookup_accepts_members():
    assert SourceSystem.from_tag(SourceSystem.CLS) is SourceSystem.CLS

    total = SanitizedTotal(
        source_system=SourceSystem.OCC, record_count=1, total_amount=Decimal("250.00")
    )

    assert total.source_system is SourceSystem.OCC


def test_error_messages_carry_context():
    error = UnresolvedParticipant("F-9", source_system="DTCC", record_id="D9")
    assert str(error) == (
        "No participant mapping for file reference 'F-9' | Source: DTCC | "
        "Record: D9 | Field: file_reference | Value: F-9"
    )

    rate_error = RateNotFound("No rate", "CAD", "USD", BUSINESS_DATE, "NEW_YORK")
    assert str(rate_error).endswith("Key: CAD->USD 2024-03-15 NEW_YORK")


def test_summary_dataframe_includes_failed_sources():
    reconciler = Reconciler()
    result = reconciler.reconcile(
        SourceTotal(source_system=SourceSystem.OCC, record_count=1, total_amount=Decimal("250.00")),
        SanitizedTotal(source_system=SourceSystem.OCC, record_count=1, total_amount=Decimal("245.00")),
    )
    summary = reconciler.summarize(
        BUSINESS_DATE, [result], failed_sources={SourceSystem.CLS: "RuntimeError: boom"}
    )

    df = create_summary_dataframe(summary)

    assert list(df["sourceSystem"]) == ["OCC", "CLS"]
    assert list(df["status"]) == ["MISMATCH", "FAILED"]
    assert df.loc[0, "amountDelta"] == "5.00"

    records = summary_to_records(summary)
    assert records[1]["recordCount"] is None
    assert records[1]["remarks"] == "RuntimeError: boom"
