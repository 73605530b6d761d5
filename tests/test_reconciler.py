from decimal import Decimal

import pytest

from derivrecon.common.adapters import RecordSkip
from derivrecon.common.models import SourceSystem
from derivrecon.common.validation import ConfigurationError
from derivrecon.unified_recon.core import Reconciler
from derivrecon.unified_recon.models import ReconStatus, SanitizedTotal, SourceTotal

from conftest import BUSINESS_DATE


def _totals(source, count, amount, sanitized_count, sanitized_amount, skip_count=0):
    return (
        SourceTotal(
            source_system=source,
            record_count=count,
            total_amount=Decimal(amount),
            skip_count=skip_count,
        ),
        SanitizedTotal(
            source_system=source,
            record_count=sanitized_count,
            total_amount=Decimal(sanitized_amount),
        ),
    )


def test_equal_totals_match():
    result = Reconciler().reconcile(*_totals(SourceSystem.OCC, 3, "1000.00", 3, "1000.00"))

    assert result.status == ReconStatus.MATCH
    assert result.count_delta == 0
    assert result.amount_delta == 0


def test_amount_break_is_mismatch_with_signed_delta():
    result = Reconciler().reconcile(*_totals(SourceSystem.OCC, 3, "1000.00", 3, "995.00"))

    assert result.status == ReconStatus.MISMATCH
    assert result.amount_delta == Decimal("5.00")


def test_count_break_is_mismatch_even_when_amounts_agree():
    result = Reconciler().reconcile(*_totals(SourceSystem.CLS, 2, "10", 3, "10"))

    assert result.status == ReconStatus.MISMATCH
    assert result.count_delta == -1


def test_tolerance_is_inclusive():
    reconciler = Reconciler(Decimal("0.01"))

    within = reconciler.reconcile(*_totals(SourceSystem.CLS, 1, "365.01", 1, "365.00"))
    outside = reconciler.reconcile(*_totals(SourceSystem.CLS, 1, "365.02", 1, "365.00"))

    assert within.status == ReconStatus.MATCH
    assert outside.status == ReconStatus.MISMATCH


def test_tolerance_accepts_strings():
    assert Reconciler("0.05").tolerance == Decimal("0.05")


@pytest.mark.parametrize("tolerance", ["-0.01", "abc"])
def test_bad_tolerance_rejected(tolerance):
    with pytest.raises(ConfigurationError):
        Reconciler(tolerance)


def test_source_mismatch_rejected():
    source_total, _ = _totals(SourceSystem.OCC, 1, "1", 1, "1")
    _, sanitized = _totals(SourceSystem.CLS, 1, "1", 1, "1")

    with pytest.raises(ValueError):
        Reconciler().reconcile(source_total, sanitized)


def test_skips_reported_on_matching_result():
    result = Reconciler().reconcile(
        *_totals(SourceSystem.CLS, 1, "365.00", 1, "365.00", skip_count=2)
    )

    assert result.is_match
    assert result.skip_count == 2


def test_summary_orders_results_and_skips():
    reconciler = Reconciler()
    occ = reconciler.reconcile(*_totals(SourceSystem.OCC, 1, "1", 1, "1"))
    dtcc = reconciler.reconcile(*_totals(SourceSystem.DTCC, 1, "0", 1, "0"))
    cls_result = reconciler.reconcile(*_totals(SourceSystem.CLS, 1, "1", 1, "2"))
    skips = [
        RecordSkip(source_system=None, record_id="X", error_type="UnknownSource", reason="x"),
        RecordSkip(source_system=SourceSystem.CLS, record_id="C1", error_type="RateNotFound", reason="r"),
    ]

    summary = reconciler.summarize(BUSINESS_DATE, [occ, cls_result, dtcc], skipped_records=skips)

    assert [r.source_system for r in summary.results] == list(SourceSystem)
    assert [s.record_id for s in summary.skipped_records] == ["C1", "X"]
    assert summary.all_match is False
    assert summary.get_result(SourceSystem.CLS).amount_delta == Decimal("-1")


def test_failed_source_prevents_all_match():
    reconciler = Reconciler()
    occ = reconciler.reconcile(*_totals(SourceSystem.OCC, 1, "1", 1, "1"))

    summary = reconciler.summarize(
        BUSINESS_DATE, [occ], failed_sources={SourceSystem.CLS: "RuntimeError: boom"}
    )

    assert summary.all_match is False
    assert summary.get_result(SourceSystem.CLS) is None
