"""Environment-driven settings for multichain-deployments library."""

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .constants import (
    CATALOG_PATH_ENV,
    DEFAULT_DEPLOY_TIMEOUT,
    DEPLOY_TIMEOUT_ENV,
    EXPLORER_API_KEY_ENVS,
    MAX_WORKERS_ENV,
    RPC_SECRET_ENVS,
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration consumed by the resolver and the orchestrator."""

    # Placeholder name -> value, substituted into RPC URL templates
    rpc_secrets: Dict[str, str] = field(default_factory=dict, repr=False)
    # Network name -> explorer API key
    explorer_api_keys: Dict[str, str] = field(default_factory=dict, repr=False)
    catalog_path: Optional[str] = None
    # None runs one attempt per chain reference at once
    max_workers: Optional[int] = None
    deploy_timeout: float = DEFAULT_DEPLOY_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Read settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings

        Raises:
            ValueError: If a numeric variable is malformed or not positive
        """
        if environ is None:
            environ = os.environ

        rpc_secrets = {name: environ[name] for name in RPC_SECRET_ENVS if environ.get(name)}

        explorer_api_keys = {}
        for network, env_name in EXPLORER_API_KEY_ENVS.items():
            if env_name is not None and environ.get(env_name):
                explorer_api_keys[network] = environ[env_name]

        return cls(
            rpc_secrets=rpc_secrets,
            explorer_api_keys=explorer_api_keys,
            catalog_path=environ.get(CATALOG_PATH_ENV) or None,
            max_workers=_positive_number(environ, MAX_WORKERS_ENV, None, int),
            deploy_timeout=float(
                _positive_number(environ, DEPLOY_TIMEOUT_ENV, DEFAULT_DEPLOY_TIMEOUT, float)
            ),
        )


def _positive_number(environ: Mapping[str, str], name: str, default, kind):
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = kind(raw)
    except ValueError as e:
        raise ValueError(f"${name} must be a number, got '{raw}'") from e
    if value <= 0:
        raise ValueError(f"${name} must be positive, got '{raw}'")
    return value
