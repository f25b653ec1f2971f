from importlib.metadata import version

import typer

from .commands import profiles, run

app = typer.Typer(
    help="Manage multiple Cloudflare accounts for Wrangler deployments",
    add_completion=False,
    no_args_is_help=True,
)


def _print_version(value: bool):
    if value:
        typer.echo(version("wrangler-profiles"))
        raise typer.Exit()


@app.callback()
def main(
    show_version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_print_version,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Manage multiple Cloudflare accounts for Wrangler deployments."""


app.command("list")(profiles.list_cmd)
app.command("add")(profiles.add)
app.command("use")(profiles.use)
app.command("current")(profiles.current)
app.command("env")(profiles.env)
app.command("login")(profiles.login)
app.command("remove")(profiles.remove)
app.command("deploy")(run.deploy)
app.command("run", context_settings=run.PASSTHROUGH_CONTEXT)(run.run)


if __name__ == "__main__":
    app()
