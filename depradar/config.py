"""Configuration models using Pydantic.

Every knob has a default matching the command-line tool's behaviour, so a
config file is optional.  Files are only needed to tune the HTTP pool or to
point the registry client at a different search endpoint.
"""

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from . import __version__

DEFAULT_REGISTRY_SEARCH_URL = "https://api.allorigins.win/raw?url=https://www.npmjs.com/search?q={name}"
DEFAULT_NOT_FOUND_MARKER = "0 packages found"
CONFIG_ENV_VAR = "DEPRADAR_CONFIG"


class ScanConfig(BaseModel):
    """Validated scan configuration.

    Example YAML::

        concurrency: 10
        request_timeout: 10
        connect_timeout: 5
        keepalive_timeout: 30
        registry_search_url: https://api.allorigins.win/raw?url=https://www.npmjs.com/search?q={name}
        not_found_marker: 0 packages found

    Attributes:
        concurrency: Maximum number of URLs processed at once.  Values
            below 1 are treated as 1.
        verbose: Report found packages, failures and progress too.
        request_timeout: Total seconds allowed per HTTP request.
        connect_timeout: Seconds allowed for the TCP connect itself.  Time
            spent waiting for a pooled connection does not count.
        pool_limit: Cap on open connections; 0 means unbounded.
        pool_limit_per_host: Per-host cap on open connections; 0 means
            unbounded.  Every registry lookup goes to the same host, so a
            cap here queues lookups behind each other.
        keepalive_timeout: Seconds an idle connection is kept open.
        registry_search_url: Search endpoint template with a ``{name}``
            placeholder.
        not_found_marker: Text whose presence in the search body means
            the package does not exist.
        user_agent: ``User-Agent`` header sent with every request.
    """

    concurrency: int = 5
    verbose: bool = False
    request_timeout: float = Field(default=10.0, gt=0)
    connect_timeout: float = Field(default=5.0, gt=0)
    pool_limit: int = Field(default=0, ge=0)
    pool_limit_per_host: int = Field(default=0, ge=0)
    keepalive_timeout: float = Field(default=30.0, ge=0)
    registry_search_url: str = DEFAULT_REGISTRY_SEARCH_URL
    not_found_marker: str = Field(default=DEFAULT_NOT_FOUND_MARKER, min_length=1)
    user_agent: str = f"DepRadar/{__version__}"

    @field_validator("concurrency", mode="before")
    @classmethod
    def _clamp_concurrency(cls, v: Any) -> int:
        """Treat zero and negative concurrency as a single slot."""
        if v is None:
            return 5
        v = int(v)
        return v if v > 0 else 1

    @field_validator("registry_search_url")
    @classmethod
    def _require_placeholder(cls, v: str) -> str:
        if "{name}" not in v:
            raise ValueError("registry_search_url must contain a {name} placeholder")
        try:
            v.format(name="x")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"registry_search_url may only use the {{name}} placeholder: {e!r}") from e
        return v


def load_config(path: Path) -> ScanConfig:
    """Load scan settings from a YAML or JSON file.

    Args:
        path: Path to the config file.

    Returns:
        Validated ``ScanConfig`` instance.

    Raises:
        FileNotFoundError: if the file doesn't exist.
        pydantic.ValidationError: if content fails validation.
    """
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        raw = json.loads(content)
    else:
        raw = yaml.safe_load(content) or {}
    return ScanConfig.model_validate(raw)


def find_config() -> Path | None:
    """Locate the config file, if any.

    ``$DEPRADAR_CONFIG`` wins; otherwise ``depradar.yaml`` or
    ``depradar.yml`` in the working directory.

    Returns:
        Path of the first existing file, or ``None``.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    for name in ("depradar.yaml", "depradar.yml"):
        if Path(name).exists():
            return Path(name)
    return None
