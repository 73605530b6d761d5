#!/usr/bin/env python
"""Uvicorn runner for the settlement reconciliation API.

Host, port and reload default to the API_HOST, API_PORT and API_RELOAD
environment variables; command line flags win over them.
"""

import argparse
import logging
import os
from typing import Optional

import uvicorn

from .main import setup_logging

APP_IMPORT_PATH = "derivrecon.unified_recon.api.app:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Settlement Reconciliation API server")
    parser.add_argument("--host", default=os.getenv("API_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("API_PORT", "7777")))
    parser.add_argument(
        "--reload",
        action="store_true",
        default=os.getenv("API_RELOAD", "false").lower() == "true",
        help="Restart the server when source files change (development only)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.getenv("RECON_LOG_LEVEL", "INFO").upper(),
        help="Log level for reconciliation runs",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Run the FastAPI application with uvicorn."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    logger.info(
        f"Starting Settlement Reconciliation API on {args.host}:{args.port} "
        f"(reload={args.reload})"
    )
    uvicorn.run(
        APP_IMPORT_PATH,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
