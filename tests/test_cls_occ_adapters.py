from decimal import Decimal

import pytest

from derivrecon.cls_recon import CLSSettings, CLSSettlementAdapter, CLSSettlementRecord
from derivrecon.common.models import BucketLabel, SourceSystem
from derivrecon.common.reference import CurrencyConverter
from derivrecon.occ_recon import OCCClearingAdapter, OCCSettings

from conftest import BUSINESS_DATE, make_cls, make_occ


@pytest.fixture
def cls_adapter(business_date, currency_converter):
    return CLSSettlementAdapter(business_date, currency_converter)


@pytest.fixture
def occ_adapter(business_date):
    return OCCClearingAdapter(business_date)


class TestCLSSettlementAdapter:
    def test_payout_used_when_payin_zero(self, cls_adapter):
        output = cls_adapter.process([make_cls(payin="0", payout="500")])

        assert len(output.entries) == 1
        entry = output.entries[0]
        assert entry.amount == Decimal("365.00")
        assert entry.bucket == BucketLabel.DEFAULT
        assert entry.source_system == SourceSystem.CLS

    def test_payin_takes_precedence(self, cls_adapter):
        output = cls_adapter.process([make_cls(payin="100", payout="500")])

        assert output.entries[0].amount == Decimal("73.00")

    def test_absent_payin_falls_back_to_payout(self, cls_adapter):
        output = cls_adapter.process([make_cls(payin=None, payout="200")])

        assert output.entries[0].amount == Decimal("146.00")

    def test_converted_amount_rounded_half_up_to_cents(self, cls_adapter):
        # 0.05 * 0.73 = 0.0365 -> 0.04
        output = cls_adapter.process([make_cls(payin="0.05", payout="0")])

        assert output.entries[0].amount == Decimal("0.04")

    def test_missing_rate_skips_record(self, business_date):
        adapter = CLSSettlementAdapter(business_date, CurrencyConverter([]))

        output = adapter.process([make_cls(record_id="C9")])

        assert output.entries == []
        assert output.skip_count == 1
        assert output.skipped[0].error_type == "RateNotFound"
        assert output.skipped[0].record_id == "C9"

    def test_ambiguous_rate_skips_record(self, business_date, cad_usd_rate):
        converter = CurrencyConverter([cad_usd_rate, cad_usd_rate])
        adapter = CLSSettlementAdapter(business_date, converter)

        output = adapter.process([make_cls()])

        assert output.skipped[0].error_type == "AmbiguousRate"

    def test_settings_select_rate_type(self, business_date, currency_converter):
        adapter = CLSSettlementAdapter(
            business_date, currency_converter, CLSSettings(rate_type="london")
        )

        output = adapter.process([make_cls()])

        assert output.skip_count == 1

    def test_record_in_target_currency_not_converted(self, business_date):
        adapter = CLSSettlementAdapter(business_date, CurrencyConverter([]))
        record = CLSSettlementRecord(
            record_id="C1",
            payin_amount=Decimal("0"),
            payout_amount=Decimal("500"),
            business_date=BUSINESS_DATE,
            currency="usd",
        )

        output = adapter.process([record])

        assert output.skip_count == 0
        assert output.entries[0].amount == Decimal("500.00")


class TestOCCClearingAdapter:
    def test_member_with_non_zero_net_kept(self, occ_adapter):
        output = occ_adapter.process([make_occ(net_settle="250.125")])

        assert len(output.entries) == 1
        assert output.entries[0].amount == Decimal("250.125")
        assert output.entries[0].source_system == SourceSystem.OCC

    def test_zero_net_filtered(self, occ_adapter):
        output = occ_adapter.process([make_occ(net_settle="0")])

        assert output.entries == []
        assert output.filtered_count == 1

    def test_absent_net_filtered(self, occ_adapter):
        output = occ_adapter.process([make_occ(net_settle=None)])

        assert output.filtered_count == 1

    def test_other_member_filtered(self, occ_adapter):
        output = occ_adapter.process([make_occ(cmo="OTHERCMO")])

        assert output.filtered_count == 1

    def test_negative_net_kept(self, occ_adapter):
        output = occ_adapter.process([make_occ(net_settle="-10.50")])

        assert output.entries[0].amount == Decimal("-10.50")

    def test_configured_member(self, business_date):
        adapter = OCCClearingAdapter(business_date, OCCSettings(cmo_code="ABC"))

        output = adapter.process([make_occ(cmo="ABC"), make_occ(record_id="O2")])

        assert [e.record_id for e in output.entries] == ["O1"]

    def test_repeated_record_id_skipped(self, occ_adapter):
        output = occ_adapter.process(
            [make_occ(record_id="O1", net_settle="100"), make_occ(record_id="O1", net_settle="150")]
        )

        assert [e.amount for e in output.entries] == [Decimal("100")]
        assert output.skip_count == 1
        assert output.skipped[0].error_type == "DuplicateRecord"
        assert output.skipped[0].record_id == "O1"
        assert output.input_count == 2
