"""Exchange rate lookup and currency conversion."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable
import logging

from pydantic import BaseModel, Field, ConfigDict, field_validator

from ..validation import RateNotFound, AmbiguousRate

logger = logging.getLogger(__name__)

RateKey = tuple[str, str, date, str]


class ExchangeRate(BaseModel):
    """One row of the exchange rate table."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )

    source_currency: str = Field(..., min_length=3, max_length=3, description="ISO currency converted from")
    target_currency: str = Field(..., min_length=3, max_length=3, description="ISO currency converted to")
    business_date: date = Field(..., description="Business date the rate applies to")
    rate_type: str = Field(..., min_length=1, description="Rate fixing (e.g. NEW_YORK)")
    rate: Decimal = Field(..., gt=0, description="Units of target currency per unit of source")

    @field_validator("source_currency", "target_currency", "rate_type")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()

    @property
    def key(self) -> RateKey:
        """Lookup key for this rate."""
        return (
            self.source_currency,
            self.target_currency,
            self.business_date,
            self.rate_type,
        )


class CurrencyConverter:
    """Converts amounts using a pre-loaded exchange rate table.

    Rates are indexed once at construction. Every key keeps all of its
    rows so that duplicate reference data surfaces as AmbiguousRate at
    lookup time rather than being silently overwritten.
    """

    def __init__(self, rates: Iterable[ExchangeRate]):
        """Index the exchange rate table.

        Args:
            rates: Exchange rate rows
        """
        self._rates: dict[RateKey, list[ExchangeRate]] = defaultdict(list)
        count = 0
        for rate in rates:
            self._rates[rate.key].append(rate)
            count += 1

        duplicates = [key for key, rows in self._rates.items() if len(rows) > 1]
        if duplicates:
            logger.warning(f"Exchange rate table has {len(duplicates)} duplicated keys")

        logger.info(f"Indexed {count} exchange rates under {len(self._rates)} keys")

    def get_rate(
        self,
        source_currency: str,
        target_currency: str,
        business_date: date,
        rate_type: str,
    ) -> Decimal:
        """Look up the unique rate for a key.

        Raises:
            RateNotFound: If no row matches
            AmbiguousRate: If more than one row matches
        """
        key = (
            source_currency.upper(),
            target_currency.upper(),
            business_date,
            rate_type.upper(),
        )
        rows = self._rates.get(key, [])

        if not rows:
            raise RateNotFound(
                "No exchange rate found", *key
            )
        if len(rows) > 1:
            raise AmbiguousRate(
                f"{len(rows)} exchange rates match one key", *key,
                match_count=len(rows),
            )
        return rows[0].rate

    def convert(
        self,
        amount: Decimal,
        source_currency: str,
        target_currency: str,
        business_date: date,
        rate_type: str,
    ) -> Decimal:
        """Convert an amount between currencies.

        The result is not rounded; callers decide precision.

        Args:
            amount: Amount in the source currency
            source_currency: ISO code converted from
            target_currency: ISO code converted to
            business_date: Business date scoping the rate
            rate_type: Rate fixing to use

        Returns:
            amount x rate, in the target currency

        Raises:
            RateNotFound: If no row matches the key
            AmbiguousRate: If more than one row matches the key
        """
        if source_currency.upper() == target_currency.upper():
            return amount

        rate = self.get_rate(source_currency, target_currency, business_date, rate_type)
        converted = amount * rate
        logger.debug(
            f"Converted {amount} {source_currency} -> {converted} {target_currency} @ {rate}"
        )
        return converted
