import os
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..lib.core.config import config
from ..lib.core.errors import ProfileError
from ..lib.core.logger import setup_logging
from ..services.profile_manager import ProfileManager

# Status lines go to stderr; stdout belongs to wrangler
console = Console(stderr=True)

# Everything after `run` is handed to wrangler untouched, options included
PASSTHROUGH_CONTEXT = {"allow_extra_args": True, "ignore_unknown_options": True}


def _get_manager() -> ProfileManager:
    return ProfileManager.from_config(config)


def _invoke(manager: ProfileManager, verb: str, call: Callable[[], int]) -> int:
    try:
        profile = manager.active()
        console.print(
            f"[blue]ℹ[/] {verb} with profile: {escape(profile.name)} ({profile.type_label})"
        )
        return call()
    except ProfileError as e:
        console.print(f"[bold red]✗[/] {escape(str(e))}")
        raise typer.Exit(code=1)


def deploy(
    env_name: Optional[str] = typer.Argument(None, metavar="[ENV]", help="Wrangler environment"),
):
    """Deploy with current profile (optional wrangler env)."""
    setup_logging(level=config.log_level)
    manager = _get_manager()
    code = _invoke(manager, "Deploying", lambda: manager.deploy(env_name, os.environ))
    raise typer.Exit(code=code)


def run(ctx: typer.Context):
    """Run any wrangler command with current profile."""
    setup_logging(level=config.log_level)
    if not ctx.args:
        console.print("[bold red]✗[/] No wrangler arguments given")
        console.print("Usage: wrangler-profiles run <args...>")
        raise typer.Exit(code=1)

    args = list(ctx.args)
    manager = _get_manager()
    code = _invoke(manager, "Running", lambda: manager.run(args, os.environ))
    raise typer.Exit(code=code)
