"""Shared helpers for CLI commands.

This module provides access to the state stored on the Typer context
by the main callback, so commands do not resolve it themselves.
"""

import typer

from filekeeper.core.paths import RuntimeContext, resolve_context


def get_runtime_context(ctx: typer.Context) -> RuntimeContext:
    """Get the runtime context resolved at start-up.

    Falls back to resolving it when a command is invoked without the
    main callback (e.g. from tests calling a sub-app directly).

    Args:
        ctx: Current Typer context.

    Returns:
        RuntimeContext for the current user.
    """
    obj = ctx.ensure_object(dict)
    context = obj.get("context")
    if context is None:
        context = resolve_context()
        obj["context"] = context
    return context


def get_flag(ctx: typer.Context, name: str) -> bool:
    """Get a global boolean option (``verbose`` or ``quiet``)."""
    obj = ctx.ensure_object(dict)
    return bool(obj.get(name, False))
