import random
from decimal import Decimal

import pytest

from derivrecon.common.models import BucketLabel, NormalizedEntry, SourceSystem
from derivrecon.unified_recon.core import Aggregator
from derivrecon.unified_recon.models import SourceTotal

from conftest import BUSINESS_DATE


def _entry(record_id, amount, bucket=BucketLabel.DEFAULT, source=SourceSystem.OCC):
    return NormalizedEntry(
        source_system=source,
        record_id=record_id,
        bucket=bucket,
        amount=Decimal(amount),
        business_date=BUSINESS_DATE,
    )


@pytest.fixture
def aggregator():
    return Aggregator()


def test_count_is_distinct_records_not_entries(aggregator):
    entries = [
        _entry("D1", "100", BucketLabel.NR_C, SourceSystem.DTCC),
        _entry("D1", "-100", BucketLabel.CP_D, SourceSystem.DTCC),
        _entry("D1", "40", BucketLabel.CP_C, SourceSystem.DTCC),
        _entry("D1", "-40", BucketLabel.NR_D, SourceSystem.DTCC),
    ]

    total = aggregator.aggregate(entries)

    assert total.record_count == 1
    assert total.total_amount == 0
    assert total.bucket_totals[BucketLabel.NR_C] == Decimal("100")
    assert total.bucket_totals[BucketLabel.NR_D] == Decimal("-40")


def test_sum_independent_of_order(aggregator):
    entries = [_entry(f"O{i}", f"{i}.1{i}") for i in range(1, 30)]
    shuffled = list(entries)
    random.Random(7).shuffle(shuffled)

    assert aggregator.aggregate(entries) == aggregator.aggregate(shuffled)


def test_empty_entries_need_source(aggregator):
    total = aggregator.aggregate([], source_system=SourceSystem.CLS)
    assert total.record_count == 0
    assert total.total_amount == 0

    with pytest.raises(ValueError):
        aggregator.aggregate([])


def test_mixed_sources_rejected(aggregator):
    entries = [_entry("O1", "1"), _entry("C1", "1", source=SourceSystem.CLS)]

    with pytest.raises(ValueError):
        aggregator.aggregate(entries)


def test_partial_totals_merge_to_full_total(aggregator):
    entries = [_entry(f"O{i}", str(i)) for i in range(10)]

    full = aggregator.aggregate(entries)
    merged = aggregator.merge(
        [aggregator.aggregate(entries[:4]), aggregator.aggregate(entries[4:])]
    )

    assert merged.record_count == full.record_count
    assert merged.total_amount == full.total_amount
    assert merged.bucket_totals == full.bucket_totals


def test_merge_across_sources_rejected():
    occ = SourceTotal(source_system=SourceSystem.OCC)
    cls_total = SourceTotal(source_system=SourceSystem.CLS)

    with pytest.raises(ValueError):
        occ + cls_total


def test_merge_requires_totals(aggregator):
    with pytest.raises(ValueError):
        aggregator.merge([])
