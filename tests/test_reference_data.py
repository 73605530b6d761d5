from datetime import date
from decimal import Decimal

import pytest

from derivrecon.common.reference import (
    CurrencyConverter,
    ExchangeRate,
    ParticipantMapping,
    ParticipantResolver,
)
from derivrecon.common.validation import (
    AmbiguousRate,
    RateNotFound,
    ReconciliationInputError,
    UnresolvedParticipant,
)

from conftest import BUSINESS_DATE


def test_resolve_known_reference(participant_resolver):
    assert participant_resolver.resolve("F-0250") == "0250"


def test_numeric_participant_ids_are_zero_padded(participant_resolver):
    assert participant_resolver.resolve("F-0141") == "0141"
    assert ParticipantMapping(file_reference="X", participant_id=250).participant_id == "0250"


def test_unresolved_reference_raises(participant_resolver):
    with pytest.raises(UnresolvedParticipant) as exc_info:
        participant_resolver.resolve("F-MISSING")

    assert exc_info.value.file_reference == "F-MISSING"
    assert "F-MISSING" in str(exc_info.value)


def test_duplicate_mapping_rejected():
    rows = [
        ParticipantMapping(file_reference="F1", participant_id="0250"),
        ParticipantMapping(file_reference="F1", participant_id="0141"),
    ]
    with pytest.raises(ReconciliationInputError):
        ParticipantResolver(rows)


def test_convert_multiplies_by_unique_rate(currency_converter):
    converted = currency_converter.convert(
        Decimal("500"), "CAD", "USD", BUSINESS_DATE, "NEW_YORK"
    )
    assert converted == Decimal("365.00")


def test_convert_does_not_round(currency_converter):
    converted = currency_converter.convert(
        Decimal("0.01"), "CAD", "USD", BUSINESS_DATE, "NEW_YORK"
    )
    assert converted == Decimal("0.0073")


def test_lookup_is_case_insensitive(currency_converter):
    assert currency_converter.get_rate("cad", "usd", BUSINESS_DATE, "new_york") == Decimal("0.73")


def test_missing_rate_is_an_error_not_zero(currency_converter):
    with pytest.raises(RateNotFound) as exc_info:
        currency_converter.convert(
            Decimal("500"), "CAD", "USD", date(2024, 3, 14), "NEW_YORK"
        )
    assert "2024-03-14" in str(exc_info.value)


def test_wrong_rate_type_not_found(currency_converter):
    with pytest.raises(RateNotFound):
        currency_converter.convert(Decimal("1"), "CAD", "USD", BUSINESS_DATE, "LONDON")


def test_duplicate_rates_are_ambiguous(cad_usd_rate):
    other = cad_usd_rate.model_copy(update={"rate": Decimal("0.74")})
    converter = CurrencyConverter([cad_usd_rate, other])

    with pytest.raises(AmbiguousRate) as exc_info:
        converter.convert(Decimal("500"), "CAD", "USD", BUSINESS_DATE, "NEW_YORK")
    assert exc_info.value.match_count == 2


def test_same_currency_needs_no_rate():
    converter = CurrencyConverter([])
    assert converter.convert(Decimal("12.5"), "USD", "USD", BUSINESS_DATE, "NEW_YORK") == Decimal("12.5")


def test_rate_must_be_positive():
    with pytest.raises(ValueError):
        ExchangeRate(
            source_currency="CAD",
            target_currency="USD",
            business_date=BUSINESS_DATE,
            rate_type="NEW_YORK",
            rate=Decimal("0"),
        )
