"""Configuration management for SuffixPy."""

from __future__ import annotations

import json
from argparse import ArgumentParser
from multiprocessing import cpu_count
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from suffixpy.utils import Constants, expand_file_path


class Config(BaseModel):
    """Configuration for a search run."""

    text: str | None = Field(None, description="File holding the text to index")
    patterns: str | None = Field(None, description="File with one pattern per line")
    pattern: list[str] = Field(default_factory=list, description="Inline patterns")
    sentinel: str = Field(Constants.DEFAULT_SENTINEL, description="Terminating symbol")
    mode: Literal["exact", "suffix-array", "approximate", "parallel"] = Field(
        "exact", description="Search strategy"
    )
    max_errors: int = Field(0, ge=0, description="Maximum mismatches per match")
    jobs: int = Field(default_factory=cpu_count, ge=1)
    case_insensitive: bool = False
    suffix_array_algorithm: Literal["doubling", "rotation"] = "doubling"
    output: str | None = None
    log_file: str | None = None
    verbose: bool = False
    debug: bool = False

    @field_validator("pattern", mode="before")
    @classmethod
    def parse_pattern_list(cls, v):
        """Accept a single string, a list, or nothing."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return list(v)

    @field_validator("sentinel")
    @classmethod
    def validate_sentinel(cls, v: str) -> str:
        """The sentinel is a single symbol."""
        if len(v) != 1:
            raise ValueError(f"sentinel must be a single character, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_cross_fields(self):
        """Validate cross-field constraints."""
        if not self.patterns and not self.pattern:
            raise ValueError("at least one pattern source is required (patterns or pattern)")
        if self.max_errors > 0 and self.mode in ("exact", "suffix-array"):
            raise ValueError(
                f"max_errors ({self.max_errors}) requires mode 'approximate' or 'parallel', "
                f"not '{self.mode}'"
            )
        return self


def load_config(json_path: str | None, cli_args, parser: ArgumentParser) -> Config:
    """Load JSON config, override with CLI args, return Config object."""

    def get_value(key: str, fallback):
        """Get value with correct priority: CLI > JSON > Fallback."""
        cli_value = getattr(cli_args, key)
        default_value = parser.get_default(key)
        # Use CLI value only if it was explicitly set by the user
        if cli_value != default_value:
            return cli_value
        return json_config.get(key, fallback)

    json_config = {}
    if json_path:
        json_path = expand_file_path(json_path) or json_path
        try:
            with open(json_path, "r", encoding="utf-8") as f:
                json_config = json.load(f)
        except FileNotFoundError:
            logger.error(f"✗ Config file not found: {json_path}")
            logger.error("  Please check the file path and try again")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"✗ Invalid JSON in config file {json_path}: {e}")
            logger.error("  Please validate your JSON syntax")
            raise ValueError(f"Invalid JSON configuration: {e}") from e
        except PermissionError:
            logger.error(f"✗ Permission denied reading config file: {json_path}")
            logger.error("  Please check file permissions and try again")
            raise
        except UnicodeDecodeError as e:
            logger.error(f"✗ Encoding error reading config file {json_path}: {e}")
            logger.error("  Please ensure the file is UTF-8 encoded")
            raise

    config_dict = {
        "text": get_value("text", None),
        "patterns": get_value("patterns", None),
        "pattern": get_value("pattern", None),
        "sentinel": get_value("sentinel", Constants.DEFAULT_SENTINEL),
        "mode": get_value("mode", "exact"),
        "max_errors": get_value("max_errors", 0),
        "jobs": get_value("jobs", cpu_count()),
        "case_insensitive": cli_args.case_insensitive
        or json_config.get("case_insensitive", False),
        "suffix_array_algorithm": get_value("suffix_array_algorithm", "doubling"),
        "output": get_value("output", None),
        "log_file": get_value("log_file", None),
        "verbose": cli_args.verbose or json_config.get("verbose", False),
        "debug": cli_args.debug or json_config.get("debug", False),
    }

    # Pydantic handles validation automatically
    try:
        return Config.model_validate(config_dict)
    except ValidationError as e:
        logger.error(f"✗ Configuration validation failed: {e}")
        logger.error("  Please check your configuration values")
        raise ValueError(f"Invalid configuration: {e}") from e
