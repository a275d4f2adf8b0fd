"""MCP configuration loader - reads from shadcn-mcp.toml with ENV overrides."""  # noqa: I001

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import shlex
import tomllib
from typing import Any, cast

LOG_LEVELS = ("debug", "info", "warning", "error")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def _require(name: str, value: Any, expected: type | tuple[type, ...]) -> None:
    # bool is an int subclass, so `timeout = true` would otherwise pass
    bad_bool = isinstance(value, bool) and expected is not bool
    if bad_bool or not isinstance(value, expected):
        raise ValueError(f"{name} has the wrong type: {type(value).__name__} ({value!r})")


@dataclass
class ServerConfig:
    """Server settings."""

    log_level: str = "info"

    def validate(self) -> None:
        _require("server.log_level", self.log_level, str)
        if self.log_level.lower() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")


@dataclass
class CliConfig:
    """Wrapped shadcn-ui CLI settings."""

    runner: str = "npx"
    package: str = "shadcn-ui@latest"
    timeout: float = 0  # 0 = wait indefinitely

    @property
    def timeout_or_none(self) -> float | None:
        return self.timeout if self.timeout > 0 else None

    def validate(self) -> None:
        _require("cli.runner", self.runner, str)
        _require("cli.package", self.package, str)
        _require("cli.timeout", self.timeout, (int, float))
        try:
            runner_parts = shlex.split(self.runner)
        except ValueError as e:
            raise ValueError(f"Invalid cli.runner {self.runner!r}: {e}") from e
        if not runner_parts:
            raise ValueError("cli.runner must not be empty")
        if not self.package.strip():
            raise ValueError("cli.package must not be empty")
        if self.timeout < 0:
            raise ValueError("cli.timeout must be >= 0")


@dataclass
class ObservabilityConfig:
    """Logging and metrics settings."""

    enabled: bool = False
    log_format: str = "text"  # "json" | "text"
    include_correlation_id: bool = True

    def validate(self) -> None:
        _require("observability.enabled", self.enabled, bool)
        _require("observability.include_correlation_id", self.include_correlation_id, bool)
        _require("observability.log_format", self.log_format, str)
        if self.log_format not in ("json", "text"):
            raise ValueError(f"Invalid log_format: {self.log_format}")


@dataclass
class McpConfig:
    """Root configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    cli: CliConfig = field(default_factory=CliConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def validate(self) -> None:
        self.server.validate()
        self.cli.validate()
        self.observability.validate()

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {
            "server": {
                "log_level": self.server.log_level,
            },
            "cli": {
                "runner": self.cli.runner,
                "package": self.cli.package,
                "timeout": self.cli.timeout,
            },
            "observability": {
                "enabled": self.observability.enabled,
                "log_format": self.observability.log_format,
                "include_correlation_id": self.observability.include_correlation_id,
            },
        }


def _apply_env_overrides(cfg: McpConfig) -> McpConfig:
    """Apply environment variable overrides. ENV beats TOML."""
    if os.getenv("SHADCN_MCP_LOG_LEVEL"):
        cfg.server.log_level = os.getenv("SHADCN_MCP_LOG_LEVEL", cfg.server.log_level)

    if os.getenv("SHADCN_MCP_RUNNER"):
        cfg.cli.runner = os.getenv("SHADCN_MCP_RUNNER", cfg.cli.runner)
    if os.getenv("SHADCN_MCP_PACKAGE"):
        cfg.cli.package = os.getenv("SHADCN_MCP_PACKAGE", cfg.cli.package)
    if os.getenv("SHADCN_MCP_TIMEOUT"):
        raw = os.getenv("SHADCN_MCP_TIMEOUT", "")
        try:
            cfg.cli.timeout = float(raw)
        except ValueError as e:
            raise ValueError(f"SHADCN_MCP_TIMEOUT must be a number, got {raw!r}") from e

    if os.getenv("SHADCN_MCP_OBS_ENABLED"):
        cfg.observability.enabled = _env_flag("SHADCN_MCP_OBS_ENABLED")
    if os.getenv("SHADCN_MCP_LOG_FORMAT"):
        cfg.observability.log_format = os.getenv(
            "SHADCN_MCP_LOG_FORMAT", cfg.observability.log_format
        )

    return cfg


def load_config(config_path: str | Path | None = None) -> McpConfig:
    """
    Load config from shadcn-mcp.toml with ENV overrides.

    Precedence: ENV → TOML → defaults

    Args:
        config_path: Path to shadcn-mcp.toml. If None, searches:
            1. SHADCN_MCP_CONFIG env var
            2. ./shadcn-mcp.toml

    Returns:
        McpConfig dataclass with merged settings.
    """
    if config_path is None:
        if os.getenv("SHADCN_MCP_CONFIG"):
            config_path = Path(cast(str, os.getenv("SHADCN_MCP_CONFIG")))
        else:
            config_path = Path("shadcn-mcp.toml")
    else:
        config_path = Path(config_path)

    cfg = McpConfig()

    if config_path.exists():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        # Server
        srv = data.get("server", {})
        cfg.server.log_level = srv.get("log_level", cfg.server.log_level)

        # Wrapped CLI
        cli = data.get("cli", {})
        cfg.cli.runner = cli.get("runner", cfg.cli.runner)
        cfg.cli.package = cli.get("package", cfg.cli.package)
        cfg.cli.timeout = cli.get("timeout", cfg.cli.timeout)

        # Observability
        obs = data.get("observability", {})
        cfg.observability.enabled = obs.get("enabled", cfg.observability.enabled)
        cfg.observability.log_format = obs.get("log_format", cfg.observability.log_format)
        cfg.observability.include_correlation_id = obs.get(
            "include_correlation_id", cfg.observability.include_correlation_id
        )

    cfg = _apply_env_overrides(cfg)

    cfg.validate()

    return cfg
