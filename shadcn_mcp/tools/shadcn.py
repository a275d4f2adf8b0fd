"""Argument vectors for the wrapped shadcn-ui CLI."""

from __future__ import annotations

from collections.abc import Sequence
import shlex

from shadcn_mcp.config import CliConfig


def _base(cli: CliConfig) -> list[str]:
    # runner may carry its own arguments, e.g. "pnpm dlx"
    return [*shlex.split(cli.runner), cli.package]


def init_command(cli: CliConfig) -> list[str]:
    """``npx shadcn-ui@latest init -y``"""
    return [*_base(cli), "init", "-y"]


def add_command(cli: CliConfig, components: Sequence[str]) -> list[str]:
    """``npx shadcn-ui@latest add <components...>``, order preserved."""
    return [*_base(cli), "add", *components]


def list_command(cli: CliConfig) -> list[str]:
    """``npx shadcn-ui@latest list``"""
    return [*_base(cli), "list"]
