import typer
from rich.console import Console
from rich.markup import escape

from ..lib.core.config import config
from ..lib.core.errors import NotFoundError, ProfileError, WrongVariantError
from ..lib.core.logger import setup_logging
from ..lib.profiles.models import OAuthProfile
from ..services.profile_manager import ProfileManager

console = Console()


def _get_manager() -> ProfileManager:
    return ProfileManager.from_config(config)


def _fail(message: str):
    console.print(f"[bold red]✗[/] {escape(message)}")
    raise typer.Exit(code=1)


def _print_profiles(manager: ProfileManager) -> bool:
    current = manager.current_name()
    found = False
    for name, profile, error in manager.list_entries():
        found = True
        if error is not None:
            label = "[red]\\[corrupt][/]"
        elif isinstance(profile, OAuthProfile):
            label = "[cyan]\\[oauth][/]"
        else:
            label = "[yellow]\\[token][/]"

        if name == current:
            console.print(f"[green]  → {escape(name)}[/] {label} (active)")
        else:
            console.print(f"    {escape(name)} {label}")
    return found


def list_cmd():
    """List all profiles."""
    setup_logging(level=config.log_level)
    manager = _get_manager()

    console.print("[bold]Available Wrangler profiles:[/]")
    if not _print_profiles(manager):
        console.print(
            "[yellow]No profiles found. Use 'add <name> --oauth' or "
            "'add <name> --token' to create one.[/]"
        )


def add(
    name: str = typer.Argument(..., help="Profile name"),
    oauth: bool = typer.Option(False, "--oauth", help="Use OAuth browser login (recommended)"),
    token: bool = typer.Option(False, "--token", help="Use API token (manual entry)"),
):
    """Add a new profile."""
    setup_logging(level=config.log_level)
    if oauth and token:
        _fail("Choose either --oauth or --token, not both")

    manager = _get_manager()
    try:
        manager.check_new_name(name)
    except ProfileError as e:
        _fail(str(e))

    if not oauth and not token:
        console.print("Select authentication method:")
        console.print("  1. OAuth (browser login) - recommended")
        console.print("  2. API Token (manual entry)")
        choice = typer.prompt("Choice [1/2]", default="1", show_default=False)
        token = choice.strip() == "2"

    try:
        if token:
            console.print(f"\n[bold]Creating API token profile: {escape(name)}[/]\n")
            account_id = typer.prompt("Cloudflare Account ID", default="", show_default=False)
            api_token = typer.prompt(
                "Cloudflare API Token", default="", show_default=False, hide_input=True
            )
            manager.add_token(name, account_id.strip(), api_token.strip())
            console.print(f"\n[bold green]✓ Profile '{escape(name)}' created (API Token)[/]")
        else:
            console.print(f"\n[bold]Creating OAuth profile: {escape(name)}[/]")
            console.print("[blue]ℹ[/] Opening browser for Cloudflare login...\n")
            profile = manager.add_oauth(
                name,
                ask_account_id=lambda: typer.prompt(
                    "Cloudflare Account ID (from dashboard)", default="", show_default=False
                ),
            )
            console.print(f"[blue]ℹ[/] Account ID: {profile.account_id}")
            console.print(f"\n[bold green]✓ Profile '{escape(name)}' created (OAuth)[/]")
    except (ProfileError, OSError) as e:
        _fail(str(e))

    console.print(f"[blue]ℹ[/] Use 'wrangler-profiles use {escape(name)}' to switch to this profile")


def use(name: str = typer.Argument(..., help="Profile to activate")):
    """Switch to a profile."""
    setup_logging(level=config.log_level)
    manager = _get_manager()
    try:
        profile = manager.use(name)
    except NotFoundError as e:
        console.print(f"[bold red]✗[/] {escape(str(e))}")
        console.print("Available profiles:")
        _print_profiles(manager)
        raise typer.Exit(code=1)
    except (ProfileError, OSError) as e:
        _fail(str(e))

    console.print(f"[bold green]✓ Switched to profile: {escape(name)} ({profile.type_label})[/]")
    if not isinstance(profile, OAuthProfile):
        console.print("[blue]ℹ[/] Run 'source $(wrangler-profiles env)' to load into shell")
    console.print("[blue]ℹ[/] Or use 'wrangler-profiles deploy' / 'wrangler-profiles run' commands")


def current():
    """Show current profile."""
    setup_logging(level=config.log_level)
    manager = _get_manager()
    if manager.current_name() is None:
        console.print("[yellow]No profile selected[/]")
        raise typer.Exit(code=1)

    try:
        profile = manager.active()
    except ProfileError as e:
        _fail(str(e))

    console.print(f"Current profile: [bold cyan]{escape(profile.name)}[/]")
    console.print(f"Type: {profile.type_label}")
    console.print(f"Account ID: {profile.account_id}")


def env():
    """Output path to current profile env file (API token profiles only)."""
    setup_logging(level=config.log_level)
    manager = _get_manager()
    try:
        env_path = manager.env_file()
    except (ProfileError, OSError) as e:
        _fail(str(e))

    # Plain output so that `source $(wrangler-profiles env)` works
    typer.echo(str(env_path))


def login(name: str = typer.Argument(..., help="OAuth profile to re-authenticate")):
    """Re-authenticate an OAuth profile."""
    setup_logging(level=config.log_level)
    manager = _get_manager()
    console.print(f"\n[bold]Re-authenticating OAuth profile: {escape(name)}[/]")
    try:
        manager.login(name)
    except WrongVariantError as e:
        console.print(f"[bold red]✗[/] {escape(str(e))}")
        console.print(
            "[blue]ℹ[/] Use 'wrangler-profiles add <name> --oauth' to create an OAuth profile"
        )
        raise typer.Exit(code=1)
    except (ProfileError, OSError) as e:
        _fail(str(e))

    console.print(f"\n[bold green]✓ Profile '{escape(name)}' re-authenticated[/]")


def remove(
    name: str = typer.Argument(..., help="Profile to remove"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Remove a profile."""
    setup_logging(level=config.log_level)
    manager = _get_manager()
    try:
        found = manager.store.exists(name)
    except ProfileError as e:
        _fail(str(e))
    if not found:
        _fail(f"Profile '{name}' not found")

    if not yes and not typer.confirm(
        f"Are you sure you want to remove profile '{name}'?", default=False
    ):
        console.print("Cancelled")
        return

    try:
        manager.remove(name)
    except (ProfileError, OSError) as e:
        _fail(str(e))

    console.print(f"[bold green]✓ Profile '{escape(name)}' removed[/]")
