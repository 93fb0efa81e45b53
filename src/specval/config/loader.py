# src/specval/config/loader.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from specval.config.log_setup import setup_logging
from specval.engine.engine import ValidationEngine, configure
from specval.errors import ConfigError
from specval.schemas.models import EngineConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    @brief
    Loader responsible for reading and validating engine configuration.

    @details
    Reads YAML from disk, parses it into a mapping, validates structure
    against the Pydantic `EngineConfig` schema, and raises structured
    `ConfigError` instances for all failure modes.
    """

    def load(self, path: Path) -> EngineConfig:
        """
        @brief
        Load and validate configuration from YAML file.

        @params
            path : Path
                Filesystem path to configuration file (.yaml or .yml).

        @returns
            Validated EngineConfig instance.

        @raises
            ConfigError
                Raised if file is missing, malformed, or fails schema validation.
        """
        # (1) Read and parse YAML configuration file
        data = self._read_yaml(path)

        # (2) Validate mapping against Pydantic schema
        cfg = self._validate(data)
        logger.info("Engine configuration loaded from %s", path)
        return cfg

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        """
        @brief
        Read the engine config into a plain dict.

        @details
        Rejects anything that cannot become EngineConfig keyword arguments:
        wrong path type, missing file, non-YAML suffix, bad syntax, an
        empty document or a non-mapping root.
        """
        # (1) Validate path type and existence
        if not isinstance(path, Path):
            raise ConfigError(
                message=f"Engine config path must be a pathlib.Path, got {type(path).__name__}",
                source="ConfigLoader._read_yaml",
                suggested_action="Wrap the path in pathlib.Path before loading it.",
            )

        if not path.exists():
            raise ConfigError(
                message=f"Engine config not found: {path}",
                source="ConfigLoader._read_yaml",
                suggested_action=(
                    "Create the engine config, or skip loading to keep the default engine."
                ),
            )

        # (2) Enforce correct file extension
        if path.suffix.lower() not in {".yaml", ".yml"}:
            raise ConfigError(
                message=f"Engine config must be YAML, got extension {path.suffix!r}",
                source="ConfigLoader._read_yaml",
                suggested_action="Rename the engine config to *.yaml or *.yml.",
            )

        # (3) Read and parse YAML content
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                message=f"Engine config is not valid YAML: {e}",
                source="ConfigLoader._read_yaml",
                suggested_action="Fix the syntax at the reported line and column.",
            ) from e
        except OSError as e:
            raise ConfigError(
                message=f"Engine config could not be read: {e}",
                source="ConfigLoader._read_yaml",
                suggested_action="Check that the process may read the engine config.",
            ) from e

        # (4) Validate structural integrity of parsed data
        if data is None:
            raise ConfigError(
                message="Engine config is empty.",
                source="ConfigLoader._read_yaml",
                suggested_action=(
                    "Set at least one key such as report_separator or log_level, "
                    "or remove the file to use the defaults."
                ),
            )

        if not isinstance(data, Mapping):
            raise ConfigError(
                message="Engine config must be a mapping of EngineConfig fields.",
                source="ConfigLoader._read_yaml",
                suggested_action="Use top-level keys such as `log_level: INFO`, not a list.",
            )

        return dict(data)

    def _validate(self, data: dict[str, Any]) -> EngineConfig:
        """Build EngineConfig, wrapping Pydantic errors in ConfigError."""
        try:
            return EngineConfig(**data)
        except ValidationError as e:
            raise ConfigError(
                message=f"Engine config does not match EngineConfig: {e}",
                source="ConfigLoader._validate",
                suggested_action=(
                    "Compare the keys with EngineConfig and ReportingConfig; "
                    "unknown keys are rejected and value_preview_length must be >= 8."
                ),
            ) from e


def configure_from_file(path: Path) -> ValidationEngine:
    """
    @brief
    Load a YAML configuration and apply it process-wide.

    @details
    Sets up logging at the configured level and installs a default engine
    built from the configuration. Returns that engine.
    """
    cfg = ConfigLoader().load(path)
    setup_logging(cfg.log_level)
    return configure(cfg)


__all__ = ["ConfigLoader", "configure_from_file"]
