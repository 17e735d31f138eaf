"""Configuration model for the assignment-insights analyzer.

Provides ``AnalyzerConfig`` with all tunable parameters and sensible
defaults.  Supports loading overrides from YAML or JSON files via the
``from_file()`` classmethod.
"""

from __future__ import annotations

import json
import pathlib
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class AnalyzerConfig(BaseModel):
    """All tunable parameters with sensible defaults for workbook analysis."""

    # --- Identity ---
    engine_version: str = "assignment_insights:1.0.0"

    # --- Reference date ---
    timezone: str = Field(
        default="Asia/Kolkata",
        description="IANA zone used to decide which calendar day is 'today'.",
    )

    # --- Header detection ---
    header_scan_depth: int = Field(
        default=5,
        ge=0,
        description="Last row index (0-based) scanned for header keywords.",
    )
    header_rows: int = Field(
        default=1,
        ge=1,
        description="Rows at the top of the used range excluded from the data rows.",
    )

    # --- Security / Resource Limits ---
    max_file_size_mb: int = Field(default=100, gt=0)
    allowed_extensions: list[str] = [".xlsx", ".xlsm", ".xls"]

    # --- Logging / PII Safety ---
    log_sample_data: bool = Field(
        default=False,
        description="If True, cell values may appear in debug logs.",
    )

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return value

    @field_validator("allowed_extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    @classmethod
    def from_file(cls, path: str) -> AnalyzerConfig:
        """Build a config from a ``.json``, ``.yaml`` or ``.yml`` file.

        Keys in the file override the defaults; an empty YAML document gives
        the default config.

        Raises:
            FileNotFoundError: *path* does not exist.
            ValueError: the suffix is not a known config format.
            ImportError: a YAML file was given without pyyaml installed.
        """
        config_path = pathlib.Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Analyzer config not found: {path}")

        suffix = config_path.suffix.lower()
        if suffix == ".json":
            overrides = json.loads(config_path.read_text())
        elif suffix in (".yaml", ".yml"):
            try:
                import yaml  # type: ignore[import-untyped]
            except ImportError as exc:
                raise ImportError(
                    "Reading a YAML analyzer config needs pyyaml "
                    "(pip install 'assignment-insights[yaml]')"
                ) from exc
            overrides = yaml.safe_load(config_path.read_text())
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'; "
                "expected .json, .yaml or .yml"
            )

        return cls(**(overrides or {}))
