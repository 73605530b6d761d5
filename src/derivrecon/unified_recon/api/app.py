"""FastAPI application for settlement reconciliation."""

import logging
from datetime import date
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, status

from ...common.models import SourceSystem
from ...common.validation import ConfigurationError, ReconciliationInputError
from .models import ReconciliationRequest, ReconciliationResponse
from .service import ReconciliationService

logger = logging.getLogger(__name__)

# Errors the caller can fix by changing the request
CLIENT_ERRORS = (ConfigurationError, ReconciliationInputError, ValueError)


def handle_api_errors(operation_name: str) -> Callable:
    """
    Decorator turning reconciliation failures into HTTP errors.

    Bad configuration or unusable inputs are 400s with the error text as
    detail. Anything else is a 500 whose detail does not leak internals.

    Args:
        operation_name: Name of the operation for logging purposes
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except CLIENT_ERRORS as e:
                logger.warning(f"{operation_name} rejected ({type(e).__name__}): {e}")
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
            except Exception as e:
                logger.error(f"{operation_name} failed: {e}", exc_info=True)
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"Internal server error during {operation_name.lower()}",
                )

        return wrapper

    return decorator


app = FastAPI(
    title="Settlement Reconciliation API",
    description="Reconciles DTCC, CLS and OCC settlement feeds against the sanitized ledger",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

service = ReconciliationService()


@app.get("/", tags=["Health"])
async def root() -> Dict[str, str]:
    """Liveness check."""
    return {
        "status": "healthy",
        "service": "settlement-reconciliation-api",
        "version": "0.1.0",
    }


@app.get("/health", tags=["Health"])
async def health_check() -> Dict[str, Any]:
    """Readiness check listing the sources this service reconciles."""
    return {
        "status": "healthy",
        "sources": {source.value: "available" for source in SourceSystem},
        "config": str(service.config_manager.config_path),
    }


@app.get("/rules", tags=["Reconciliation"])
@handle_api_errors("Rule listing")
async def list_rules(
    businessDate: Optional[date] = Query(None, description="Business date (default: today)"),
) -> List[Dict[str, Any]]:
    """Describe the filter and transform rules applied to each source."""
    return service.describe_rules(businessDate or date.today())


@app.post(
    "/reconcile",
    response_model=ReconciliationResponse,
    status_code=status.HTTP_200_OK,
    tags=["Reconciliation"],
)
@handle_api_errors("Reconciliation")
async def reconcile(request: ReconciliationRequest) -> ReconciliationResponse:
    """
    Reconcile one business date.

    Routes source-tagged raw records to the DTCC, CLS and OCC rules and
    returns one result per source. A MISMATCH is a normal 200 response.
    """
    return await service.process_reconciliation(request)
