"""Main entry point for the derivatives settlement reconciliation CLI."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from ..common.reference import CurrencyConverter, ParticipantResolver
from ..common.validation import ConfigurationError, ReconciliationInputError
from ..dtcc_recon import CutoffPolicy
from .cli import UnifiedDisplay
from .config import ReconConfigManager
from .core import ReconciliationPipeline
from .loaders import PayloadLoader
from .utils import save_summary_to_json

EXIT_MATCH = 0
EXIT_MISMATCH = 1
EXIT_FATAL = 2

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "NONE") -> None:
    """Set up logging configuration for reconciliation runs.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, NONE)
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_level.upper() == "NONE":
        logging.getLogger().setLevel(logging.CRITICAL + 1)  # Higher than CRITICAL
        return

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _parse_business_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid business date '{value}' (expected YYYY-MM-DD)") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Derivatives Settlement Reconciliation - DTCC, CLS and OCC against the sanitized ledger"
    )
    parser.add_argument("--input", type=Path, help="Path to JSON payload file")
    parser.add_argument(
        "--business-date",
        type=_parse_business_date,
        help="Business date to reconcile (default: payload businessDate)",
    )
    parser.add_argument("--config", type=Path, help="Path to JSON configuration file")
    parser.add_argument(
        "--cutoff-policy",
        choices=[policy.value for policy in CutoffPolicy],
        help="Handling of eligible DTCC records at or before the cutoff",
    )
    parser.add_argument("--tolerance", help="Allowed absolute amount delta for a MATCH")
    parser.add_argument("--json-output", type=Path, help="Write the summary to this JSON file")
    parser.add_argument(
        "--show-rules",
        action="store_true",
        help="Display information about source rules and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "NONE"],
        default="NONE",
        help="Set logging level",
    )
    return parser


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.tolerance is not None:
        overrides["tolerance"] = args.tolerance
    if args.cutoff_policy is not None:
        overrides["dtcc"] = {"cutoff_policy": args.cutoff_policy}
    return overrides


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the reconciliation CLI.

    Returns:
        Exit code (0 all MATCH, 1 breaks found, 2 fatal error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    display = UnifiedDisplay()

    try:
        config_manager = ReconConfigManager(args.config)
        loader = PayloadLoader()

        if args.show_rules:
            run_config = config_manager.build_run_config(
                args.business_date or date.today(), _cli_overrides(args)
            )
            pipeline = ReconciliationPipeline(run_config)
            adapters = pipeline.build_adapters(ParticipantResolver({}), CurrencyConverter([]))
            for adapter in adapters.values():
                display.show_rule_info(adapter.get_rule_info())
            return EXIT_MATCH

        if args.input is None:
            parser.error("--input is required unless --show-rules is given")

        payload = loader.load_file(args.input)

        business_date = args.business_date
        if business_date is None and payload.get("businessDate"):
            business_date = _parse_business_date(str(payload["businessDate"]))

        payload_config = payload.get("config") or {}
        if not isinstance(payload_config, dict):
            raise ConfigurationError(
                "Payload config must be an object",
                field="config",
                value=type(payload_config).__name__,
            )
        overrides = dict(payload_config)
        for key, value in _cli_overrides(args).items():
            existing = overrides.get(key)
            if isinstance(value, dict) and isinstance(existing, dict):
                overrides[key] = {**existing, **value}
            else:
                overrides[key] = value

        run_config = config_manager.build_run_config(business_date, overrides)
        display.show_header(run_config)

        inputs = loader.build_inputs(payload)
        summary = ReconciliationPipeline(run_config).run(inputs)

        display.show_summary(summary)
        display.show_bucket_totals(summary)
        display.show_skipped_records(summary.skipped_records)

        if args.json_output:
            save_summary_to_json(summary, args.json_output)
            logger.info(f"Summary written to {args.json_output}")

        return EXIT_MATCH if summary.all_match else EXIT_MISMATCH

    except (ConfigurationError, ReconciliationInputError, FileNotFoundError) as e:
        logger.error(f"Fatal error: {e}")
        display.show_error(str(e))
        return EXIT_FATAL
    except argparse.ArgumentTypeError as e:
        display.show_error(str(e))
        return EXIT_FATAL
    except KeyboardInterrupt:
        logger.info("Reconciliation interrupted by user")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
