from datetime import date, datetime
from decimal import Decimal

import pytest

from derivrecon.cls_recon import CLSSettlementRecord
from derivrecon.common.reference import CurrencyConverter, ExchangeRate, ParticipantResolver
from derivrecon.dtcc_recon import DTCCIntradayRecord
from derivrecon.occ_recon import OCCClearingRecord

BUSINESS_DATE = date(2024, 3, 15)


@pytest.fixture
def business_date():
    return BUSINESS_DATE


@pytest.fixture
def participant_resolver():
    return ParticipantResolver({"F-0250": "0250", "F-0141": "141", "F-0999": "0999"})


@pytest.fixture
def cad_usd_rate():
    return ExchangeRate(
        source_currency="CAD",
        target_currency="USD",
        business_date=BUSINESS_DATE,
        rate_type="NEW_YORK",
        rate=Decimal("0.73"),
    )


@pytest.fixture
def currency_converter(cad_usd_rate):
    return CurrencyConverter([cad_usd_rate])


def make_dtcc(
    record_id="D1",
    balance_type="DTC LEGAL ENTITY TOTALS",
    file_reference="F-0250",
    credit="100",
    debit="40",
    at="18:40:00",
):
    hour, minute, second = (int(part) for part in at.split(":"))
    return DTCCIntradayRecord(
        record_id=record_id,
        balance_type=balance_type,
        file_reference=file_reference,
        credit_amount=Decimal(credit) if credit is not None else None,
        debit_amount=Decimal(debit) if debit is not None else None,
        timestamp=datetime(2024, 3, 15, hour, minute, second),
    )


def make_cls(record_id="C1", payin="0", payout="500"):
    return CLSSettlementRecord(
        record_id=record_id,
        payin_amount=Decimal(payin) if payin is not None else None,
        payout_amount=Decimal(payout) if payout is not None else None,
        business_date=BUSINESS_DATE,
    )


def make_occ(record_id="O1", cmo="WFCSLLC", net_settle="250"):
    return OCCClearingRecord(
        record_id=record_id,
        cmo_code=cmo,
        net_settlement_amount=Decimal(net_settle) if net_settle is not None else None,
    )
