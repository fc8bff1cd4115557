"""
Utilities shared by CLI commands.
"""

from typing import Any

import click

from ..registry.base import RegistrySource
from ..registry.client import CompaniesHouseClient
from ..shared.models import RegistryConfig
from ..shared.output import OutputManager
from .output import CLIOutputManager, create_output_manager


def get_cli_flags(ctx: click.Context) -> dict[str, Any]:
    """Extract CLI flags from Click context, traversing parent contexts."""
    flags: dict[str, Any] = {}

    # Parents first so that child parameters override
    chain = []
    current_ctx: click.Context | None = ctx
    while current_ctx:
        chain.append(current_ctx)
        current_ctx = current_ctx.parent
    for context in reversed(chain):
        flags.update(context.params or {})

    return flags


def get_output_manager_from_context(ctx: click.Context) -> CLIOutputManager:
    """Create output manager from Click context flags."""
    flags = get_cli_flags(ctx)
    return create_output_manager(
        quiet=flags.get("quiet", False), verbose=flags.get("verbose", False)
    )


def get_registry_from_context(ctx: click.Context, api_key: str | None = None) -> RegistrySource:
    """Registry stored on the context (tests inject one), else a configured API client."""
    registry = ctx.obj.get("registry")
    if registry is not None:
        return registry

    flags = get_cli_flags(ctx)
    output_manager = ctx.obj.get("output_manager") or OutputManager()
    config = RegistryConfig.from_env(
        api_key=api_key,
        cache_enabled=not flags.get("no_cache", False),
        cache_dir=output_manager.cache_dir,
    )
    registry = CompaniesHouseClient(config)
    ctx.obj["registry"] = registry
    return registry
