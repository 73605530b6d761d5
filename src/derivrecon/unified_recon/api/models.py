"""Pydantic models for API request and response."""

from datetime import date
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ConfigDict


class ReconciliationRequest(BaseModel):
    """Request model for the reconciliation API."""

    businessDate: date = Field(..., description="Business date to reconcile")
    records: list[dict[str, Any]] = Field(
        default_factory=list, description="Raw records tagged with sourceSystem"
    )
    participantMappings: Union[list[dict[str, Any]], dict[str, Any]] = Field(
        default_factory=list, description="File reference to participant mappings"
    )
    exchangeRates: list[dict[str, Any]] = Field(
        default_factory=list, description="Exchange rate rows"
    )
    sanitizedTotals: list[dict[str, Any]] = Field(
        ..., description="Sanitized totals, one per source system", min_length=1
    )
    config: Optional[dict[str, Any]] = Field(
        None, description="Overrides for the run configuration"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "businessDate": "2024-03-15",
                    "records": [
                        {
                            "sourceSystem": "DTCC",
                            "recordId": "D1",
                            "baltype": "DTC LEGAL ENTITY TOTALS",
                            "fileReference": "DTC-0250",
                            "credit": "100.00",
                            "debit": "40.00",
                            "timestamp": "2024-03-15T18:40:00",
                        },
                        {
                            "sourceSystem": "CLS",
                            "recordId": "C1",
                            "payin": "0",
                            "payout": "500.00",
                        },
                        {
                            "sourceSystem": "OCC",
                            "recordId": "O1",
                            "cmo": "WFCSLLC",
                            "netSettle": "250.00",
                        },
                    ],
                    "participantMappings": {"DTC-0250": "0250"},
                    "exchangeRates": [
                        {
                            "sourceCurrency": "CAD",
                            "targetCurrency": "USD",
                            "businessDate": "2024-03-15",
                            "rateType": "NEW_YORK",
                            "rate": "0.73",
                        }
                    ],
                    "sanitizedTotals": [
                        {"sourceSystem": "DTCC", "recordCount": 1, "totalAmount": "0.00"},
                        {"sourceSystem": "CLS", "recordCount": 1, "totalAmount": "365.00"},
                        {"sourceSystem": "OCC", "recordCount": 1, "totalAmount": "250.00"},
                    ],
                }
            ]
        }
    )


class ReconciliationResponse(BaseModel):
    """Response model for the reconciliation API."""

    businessDate: date
    allMatch: bool
    unroutedCount: int
    results: list[dict[str, Any]]
    skippedRecords: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
