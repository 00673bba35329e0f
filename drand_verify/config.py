"""
drand_verify configuration.

Typed configuration for the process-level knobs of the verifier:
- which curve engine backs point decoding, hashing and pairings
- which known network the CLI verifies against by default
- log level/format and whether Prometheus metrics are recorded

It is dependency-free (standard library only) and provides:
- A dataclass config with validation
- Loading from environment variables (prefix configurable)
- Loading from a JSON file
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any, Dict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
_LOG_FORMATS = {"text", "json"}

ENV_PREFIX = "DRAND_VERIFY_"


@dataclass
class VerifyConfig:
    """
    engine: name of the curve engine registered in `drand_verify.engine.ENGINES`
    network: default network preset (see `drand_verify.networks.NETWORKS`)
    log_level: minimum level for the CLI's root logger
    log_format: "text" for humans, "json" for log shippers
    metrics_enabled: record verify outcomes/latency into Prometheus instruments
    """

    engine: str = "py_ecc"
    network: str = "mainnet"
    log_level: str = "WARNING"
    log_format: str = "text"
    metrics_enabled: bool = True

    def validate_library(self) -> None:
        """Check only the fields the verifier itself reads (engine, metrics)."""
        if not self.engine or not self.engine.strip():
            raise ValueError("engine must be a non-empty name")

    def validate(self) -> None:
        self.validate_library()
        if not self.network or not self.network.strip():
            raise ValueError("network must be a non-empty name")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {self.log_level}")
        if self.log_format not in _LOG_FORMATS:
            raise ValueError(f"Unsupported log format: {self.log_format}")

    # -------------------------
    # Serialization helpers
    # -------------------------

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    # -------------------------
    # Loaders
    # -------------------------

    @staticmethod
    def from_env(prefix: str = ENV_PREFIX, strict: bool = True) -> "VerifyConfig":
        """
        Load configuration from environment variables. All variables are optional.

        Supported keys:
          - DRAND_VERIFY_ENGINE=py_ecc
          - DRAND_VERIFY_NETWORK=quicknet
          - DRAND_VERIFY_LOG_LEVEL=DEBUG
          - DRAND_VERIFY_LOG_FORMAT=json
          - DRAND_VERIFY_METRICS=false

        With `strict=False` only the library fields are validated.
        """

        def _get(name: str, cast: Any, default: Any) -> Any:
            key = prefix + name
            raw = os.getenv(key)
            if raw is None:
                return default
            try:
                if cast is bool:
                    return raw.lower() in {"1", "true", "yes", "on"}
                return cast(raw)
            except Exception as e:
                raise ValueError(f"Invalid value for {key}: {raw!r}") from e

        cfg = VerifyConfig(
            engine=_get("ENGINE", str, "py_ecc"),
            network=_get("NETWORK", str, "mainnet"),
            log_level=_get("LOG_LEVEL", str, "WARNING").upper(),
            log_format=_get("LOG_FORMAT", str, "text").lower(),
            metrics_enabled=_get("METRICS", bool, True),
        )
        if strict:
            cfg.validate()
        else:
            cfg.validate_library()
        return cfg

    @staticmethod
    def from_file(path: str) -> "VerifyConfig":
        """
        Load configuration from a JSON file. Keys mirror the dataclass fields:

            {"engine": "py_ecc", "network": "quicknet", "log_format": "json"}

        Unknown keys are rejected so typos do not silently fall back to defaults.
        """
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse {path!r} as JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"{path!r}: top-level JSON must be an object")

        unknown = set(data) - set(VerifyConfig.__dataclass_fields__)
        if unknown:
            raise ValueError(f"{path!r}: unknown config keys: {', '.join(sorted(unknown))}")

        cfg = VerifyConfig(**data)
        cfg.validate()
        return cfg


@lru_cache(maxsize=1)
def load_config() -> VerifyConfig:
    """
    Process-wide config, read once from the environment.

    Only the library fields are validated here; log and network settings are
    CLI concerns and are checked by `drand_verify.cli.run`.
    """
    return VerifyConfig.from_env(strict=False)


DEFAULT: VerifyConfig = VerifyConfig()

__all__ = ["VerifyConfig", "load_config", "DEFAULT", "ENV_PREFIX"]
