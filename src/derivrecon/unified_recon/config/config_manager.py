"""Configuration manager for reconciliation runs."""

import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional
import logging

from pydantic import BaseModel, Field, ConfigDict, ValidationError

from ...common.validation import ConfigurationError
from ...dtcc_recon.config import DTCCSettings
from ...cls_recon.config import CLSSettings
from ...occ_recon.config import OCCSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "unified_config.json"


class RunConfig(BaseModel):
    """Configuration for one reconciliation run.

    Business date is required; every other setting has a default.
    """

    model_config = ConfigDict(
        frozen=True,
        validate_assignment=True,  # Immutable configuration
        populate_by_name=True,
    )

    business_date: date = Field(..., description="Business date being reconciled")
    tolerance: Decimal = Field(
        default=Decimal("0"), ge=0, description="Allowed |amount delta| for a MATCH"
    )
    max_workers: int = Field(default=3, ge=1, description="Sources processed in parallel")
    dtcc_settings: DTCCSettings = Field(default_factory=DTCCSettings, alias="dtcc")
    cls_settings: CLSSettings = Field(default_factory=CLSSettings, alias="cls")
    occ_settings: OCCSettings = Field(default_factory=OCCSettings, alias="occ")


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ReconConfigManager:
    """Loads run configuration from JSON and builds validated RunConfigs.

    The JSON file carries the defaults operators maintain; per-run values
    such as the business date are supplied as overrides.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to a JSON config file. Defaults to
                unified_config.json beside this module.
        """
        if config_path is None:
            config_path = Path(__file__).parent / DEFAULT_CONFIG_FILE

        self.config_path = config_path
        self.raw_config: dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file.

        Raises:
            ConfigurationError: If the file is missing or not valid JSON
        """
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                raw_config: Any = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Configuration file not found at {self.config_path}"
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file: {e}") from e

        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                f"Configuration root must be an object in {self.config_path}"
            )
        self.raw_config = raw_config
        logger.info(f"Loaded reconciliation configuration from {self.config_path}")

    def build_run_config(
        self,
        business_date: Optional[date] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> RunConfig:
        """Build a validated RunConfig for one run.

        Args:
            business_date: Business date to reconcile (overrides the file)
            overrides: Nested setting overrides, e.g. {"dtcc": {"cutoff_policy": "zero_fill"}}

        Returns:
            Frozen RunConfig

        Raises:
            ConfigurationError: If the business date is missing or a setting is malformed
        """
        values = _deep_merge(self.raw_config, overrides or {})
        if business_date is not None:
            values["business_date"] = business_date

        if values.get("business_date") in (None, ""):
            raise ConfigurationError("Business date is required", field="business_date")

        try:
            run_config = RunConfig(**values)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise ConfigurationError(
                f"Invalid reconciliation configuration: {e.error_count()} error(s)",
                field=fields,
            ) from e
        except TypeError as e:
            raise ConfigurationError(f"Invalid reconciliation configuration: {e}") from e

        logger.info(
            f"Run configuration for {run_config.business_date.isoformat()}: "
            f"tolerance={run_config.tolerance}, cutoff={run_config.dtcc_settings.cutoff_time}, "
            f"policy={run_config.dtcc_settings.cutoff_policy.value}"
        )
        return run_config

    def reload_config(self) -> None:
        """Reload configuration from file.

        Useful for development and testing when config files change.
        """
        self._load_config()
