"""Runtime settings for classloom.

Precedence, lowest to highest: model defaults, YAML config file,
environment variables (``.env`` is loaded first).
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join("config", "classloom.yaml")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ExtractionSettings(BaseModel):
    source_suffixes: List[str] = Field(default_factory=lambda: [".java"])
    encoding: str = "utf-8"
    skip_directories: List[str] = Field(default_factory=list)


class InferenceSettings(BaseModel):
    synthesize_supertypes: bool = True
    namespace_search_order: List[str] = Field(default_factory=list)


class GeneratorSettings(BaseModel):
    default_import_namespace: str = "java.util"
    indent: str = "\t"
    file_suffix: str = ".java"


class LayoutSettings(BaseModel):
    origin_x: float = 50.0
    origin_y: float = 50.0
    horizontal_gap: float = 50.0
    vertical_gap: float = 50.0
    max_row_width: float = 800.0


class Settings(BaseModel):
    """Top-level settings tree."""
    database_url: str = "sqlite:///classloom.db"
    log_level: str = "INFO"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    inference: InferenceSettings = Field(default_factory=InferenceSettings)
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level


# =============================================================================
# Loading
# =============================================================================

def _load_yaml(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    logger.debug(f"Loaded config file {path}")
    return data


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if os.getenv("DATABASE_URL"):
        overrides["database_url"] = os.environ["DATABASE_URL"]
    if os.getenv("CLASSLOOM_LOG_LEVEL"):
        overrides["log_level"] = os.environ["CLASSLOOM_LOG_LEVEL"].upper()
    if os.getenv("CLASSLOOM_DEFAULT_IMPORT_NAMESPACE"):
        overrides.setdefault("generator", {})["default_import_namespace"] = (
            os.environ["CLASSLOOM_DEFAULT_IMPORT_NAMESPACE"]
        )
    if os.getenv("CLASSLOOM_SYNTHESIZE_SUPERTYPES"):
        value = os.environ["CLASSLOOM_SYNTHESIZE_SUPERTYPES"].strip().lower()
        overrides.setdefault("inference", {})["synthesize_supertypes"] = value in ("1", "true", "yes", "on")
    return overrides


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Build a Settings object from the config file and environment.

    Args:
        config_path: YAML file; defaults to ``$CLASSLOOM_CONFIG`` or
            ``config/classloom.yaml`` (silently skipped if missing)
    """
    load_dotenv()
    path = config_path or os.getenv("CLASSLOOM_CONFIG") or DEFAULT_CONFIG_PATH
    data = _merge(_load_yaml(path), _env_overrides())
    return Settings.model_validate(data)


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return load_settings()
