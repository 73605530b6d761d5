"""DataFrame output utilities for reconciliation summaries."""

from pathlib import Path
from typing import Any, Dict, List
import json

import pandas as pd

from ..models import RunSummary


def create_summary_dataframe(summary: RunSummary) -> pd.DataFrame:
    """
    Create standardized DataFrame from a run summary.

    Args:
        summary: RunSummary from the pipeline

    Returns:
        DataFrame with one row per source: businessDate, sourceSystem,
        status, recordCount, sanitizedCount, countDelta, totalAmount,
        sanitizedAmount, amountDelta, skippedCount, remarks
    """
    records: List[Dict[str, Any]] = []
    business_date = summary.business_date.isoformat()

    for result in summary.results:
        skips = summary.skips_for(result.source_system)
        records.append(
            {
                "businessDate": business_date,
                "sourceSystem": result.source_system.value,
                "status": result.status.value,
                "recordCount": result.source_total.record_count,
                "sanitizedCount": result.sanitized_total.record_count,
                "countDelta": result.count_delta,
                # Amounts stay strings so no float rounding creeps in
                "totalAmount": str(result.source_total.total_amount),
                "sanitizedAmount": str(result.sanitized_total.total_amount),
                "amountDelta": str(result.amount_delta),
                "skippedCount": result.skip_count,
                "remarks": "; ".join(f"{s.record_id}: {s.error_type}" for s in skips),
            }
        )

    for source, error in summary.failed_sources.items():
        records.append(
            {
                "businessDate": business_date,
                "sourceSystem": source.value,
                "status": "FAILED",
                "recordCount": None,
                "sanitizedCount": None,
                "countDelta": None,
                "totalAmount": None,
                "sanitizedAmount": None,
                "amountDelta": None,
                "skippedCount": None,
                "remarks": error,
            }
        )

    columns = [
        "businessDate", "sourceSystem", "status", "recordCount", "sanitizedCount",
        "countDelta", "totalAmount", "sanitizedAmount", "amountDelta",
        "skippedCount", "remarks",
    ]
    return pd.DataFrame(records, columns=columns, dtype=object)


def summary_to_records(summary: RunSummary) -> List[Dict[str, Any]]:
    """Convert a summary to JSON-ready records."""
    df = create_summary_dataframe(summary)
    # None instead of NaN for JSON output
    df = df.where(pd.notna(df), None)
    records: List[Dict[str, Any]] = df.to_dict(orient="records")  # type: ignore[assignment]
    return records


def save_summary_to_json(summary: RunSummary, output_path: Path) -> Path:
    """Write the summary records plus the overall status to a JSON file."""
    output = {
        "businessDate": summary.business_date.isoformat(),
        "allMatch": summary.all_match,
        "unroutedCount": summary.unrouted_count,
        "results": summary_to_records(summary),
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(output, f, indent=2)
    return output_path
