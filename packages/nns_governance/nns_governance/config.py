from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ic.principal import Principal
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger("GovernanceConfig")

DEFAULT_HOST = "https://ic0.app"


@dataclass(frozen=True)
class GovernanceConfig:
    """Runtime configuration used by the container."""

    canister_id: Optional[str] = None
    host: str = DEFAULT_HOST
    default_limit: int = 10
    request_timeout: float = 30.0
    detail_concurrency: int = 1
    strict_commands: bool = False
    omit_large_fields: Optional[bool] = None
    transport: str = "icp"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GovernanceConfig":
        environ = os.environ if environ is None else environ
        raw = {
            field_name: environ[env_key]
            for field_name, env_key in _ENV_KEYS.items()
            if environ.get(env_key) not in (None, "")
        }
        settings = _validate(EnvironmentSettings, raw)
        if settings.canister_id is None:
            logger.warning("GOVERNANCE_CANISTER_ID is not provided")
        return cls(**settings.model_dump(exclude_unset=True))

    def require_canister_id(self) -> str:
        if not self.canister_id:
            raise ConfigurationError(
                "GOVERNANCE_CANISTER_ID must be set before querying the governance canister"
            )
        try:
            return check_principal(self.canister_id)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e


def check_principal(value: str) -> str:
    """Raise ValueError unless value is a textual principal id (with valid checksum)."""
    try:
        Principal.from_str(value)
    except Exception as e:
        raise ValueError(f"'{value}' is not a valid canister id") from e
    return value


_ENV_KEYS: Dict[str, str] = {
    "canister_id": "GOVERNANCE_CANISTER_ID",
    "host": "GOVERNANCE_HOST",
    "default_limit": "GOVERNANCE_DEFAULT_LIMIT",
    "request_timeout": "GOVERNANCE_REQUEST_TIMEOUT",
    "detail_concurrency": "GOVERNANCE_DETAIL_CONCURRENCY",
    "strict_commands": "GOVERNANCE_STRICT_COMMANDS",
    "omit_large_fields": "GOVERNANCE_OMIT_LARGE_FIELDS",
    "transport": "GOVERNANCE_TRANSPORT",
}


class EnvironmentSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    canister_id: Optional[str] = Field(default=None, min_length=1)
    host: str = Field(default=DEFAULT_HOST, min_length=1)
    default_limit: int = Field(default=10, ge=0, le=2**32 - 1)
    request_timeout: float = Field(default=30.0, gt=0)
    detail_concurrency: int = Field(default=1, ge=1)
    strict_commands: bool = False
    omit_large_fields: Optional[bool] = None
    transport: str = Field(default="icp", min_length=1)

    @field_validator("canister_id", "host", mode="before")
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if isinstance(value, str) else value

    @field_validator("canister_id")
    @classmethod
    def _principal(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else check_principal(value)


class PluginSettings(BaseModel):
    """Settings handed to ``GovernancePlugin.init`` by the host."""

    model_config = ConfigDict(extra="ignore")

    GOVERNANCE_CANISTER_ID: Optional[str] = Field(
        default=None, min_length=1, description="NNS Governance Canister ID"
    )

    @field_validator("GOVERNANCE_CANISTER_ID")
    @classmethod
    def _principal(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else check_principal(value)


def validate_plugin_settings(settings: Mapping[str, Any]) -> PluginSettings:
    validated = _validate(PluginSettings, dict(settings))
    if not validated.GOVERNANCE_CANISTER_ID:
        logger.warning("GOVERNANCE_CANISTER_ID is not provided")
    return validated


def _validate(model, raw: Dict[str, Any]):
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        problems = ", ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid governance configuration: {problems}") from e
