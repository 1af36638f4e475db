"""Configuration loading and pipeline settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.errors import ConfigError
from governance.id_validator import IdPolicy
from registry.action_registry import HandlerKind


class PaginationSettings(BaseModel):
    limit: int = Field(default=20, ge=1, le=1000)


class PathSettings(BaseModel):
    db_path: str = "workspace/crud.db"
    audit_log_path: str = "logs/audit.jsonl"


class PipelineSettings(BaseModel):
    """Validated pipeline configuration."""

    model_config = ConfigDict(protected_namespaces=())

    actions: set[str] = Field(default_factory=set)
    validate_id: IdPolicy = IdPolicy.UUID
    event_prefix: str = "crud"
    action_map: dict[str, HandlerKind] = Field(default_factory=dict)
    view_map: dict[str, str] = Field(default_factory=dict)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    model_name: str = "Record"
    resource: str = "records"
    required_fields: list[str] = Field(default_factory=list)
    paths: PathSettings = Field(default_factory=PathSettings)
    log_level: str = "INFO"

    @field_validator("validate_id", mode="before")
    @classmethod
    def _coerce_policy(cls, value: Any) -> IdPolicy:
        return IdPolicy.coerce(value)

    @field_validator("action_map", mode="before")
    @classmethod
    def _coerce_kinds(cls, value: Any) -> dict[str, HandlerKind]:
        if not isinstance(value, dict):
            raise ValueError("action_map must be a mapping.")
        return {str(name): HandlerKind.coerce(kind) for name, kind in value.items()}

    @field_validator("actions", mode="before")
    @classmethod
    def _coerce_actions(cls, value: Any) -> set[str]:
        if value is None:
            return set()
        if isinstance(value, str):
            return {value}
        return {str(name) for name in value}


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(config: dict[str, Any]) -> PipelineSettings:
    """Validate a raw config mapping."""
    try:
        return PipelineSettings.model_validate(config)
    except ValidationError as exc:
        raise ConfigError(f"Invalid pipeline configuration: {exc}") from exc


def ensure_runtime_dirs(root: Path, settings: PipelineSettings) -> dict[str, Path]:
    """Ensure database and log directories exist and return resolved paths."""
    db_path = (root / settings.paths.db_path).resolve()
    audit_log_path = (root / settings.paths.audit_log_path).resolve()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    audit_log_path.parent.mkdir(parents=True, exist_ok=True)

    return {
        "db_path": db_path,
        "audit_log_path": audit_log_path,
    }


def load_effective_config(root: Path) -> dict[str, Any]:
    """Load ``config/default.yaml`` with ``config/local.yaml`` merged on top."""
    config_dir = root / "config"
    default_cfg = load_yaml(config_dir / "default.yaml")
    local_cfg = load_yaml(config_dir / "local.yaml")
    return merge_dicts(default_cfg, local_cfg)
