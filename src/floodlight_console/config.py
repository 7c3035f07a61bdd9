"""Console configuration: defaults, YAML file and CLI overrides."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.logging import get_logger
from .exceptions import ConfigError

log = get_logger("config")

DEFAULT_PORT = 55220
DEFAULT_USERNAME = "root"
DEFAULT_PASSWORD = "password"
DEFAULT_HOSTKEY = "ssh_host_rsa_key"
DEFAULT_REST_URL = "http://localhost:8080"


class ConsoleConfig(BaseModel):
    """Recognized console options. Unspecified options keep their defaults."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    port: int = Field(DEFAULT_PORT, ge=1, le=65535, description="SSH listen port")
    username: str = Field(DEFAULT_USERNAME, min_length=1)
    password: str = Field(DEFAULT_PASSWORD)
    hostkey: str = Field(DEFAULT_HOSTKEY, description="Host key file path")
    bind_address: str = Field("0.0.0.0")
    rest_url: str = Field(DEFAULT_REST_URL, description="Controller REST API base")
    rest_timeout: float = Field(5.0, gt=0)
    history_size: int = Field(100, ge=0)
    prompt: str = Field("floodlight> ")

    @field_validator("rest_url")
    @classmethod
    def validate_rest_url(cls, v: str) -> str:
        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError(f"REST URL must start with http:// or https://; got: {v}")
        return v.rstrip("/")

    def masked(self) -> dict:
        """Config as a dict with the password hidden."""
        data = self.model_dump()
        data["password"] = "***"
        return data


def _normalize_keys(raw: dict) -> dict:
    """Reduce namespaced keys ('net.floodlightcontroller.cli.Cli.port') to 'port'."""
    known = set(ConsoleConfig.model_fields)
    result = {}
    for key, value in raw.items():
        name = str(key).rsplit(".", 1)[-1].replace("-", "_")
        if name not in known:
            log.warning("Ignoring unknown config option: %s", key)
            continue
        result[name] = value
    return result


def load_config(path: Optional[str] = None, **overrides: Any) -> ConsoleConfig:
    """Build the effective configuration.

    Args:
        path: Optional YAML file holding a flat mapping of options
        **overrides: Values taking precedence over the file (None is skipped)

    Returns:
        Validated ConsoleConfig

    Raises:
        ConfigError: if the file cannot be read or a value is invalid
    """
    values: dict = {}
    if path:
        try:
            raw = yaml.safe_load(Path(path).read_text())
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        values.update(_normalize_keys(raw))

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ConsoleConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
