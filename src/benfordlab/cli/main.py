# src/benfordlab/cli/main.py
import typer

from benfordlab.cli.law import law_app
from benfordlab.cli.report import report, simulate
from benfordlab.core.logging import set_console_level

app = typer.Typer(
    help="benfordlab: leading-digit law analysis",
    context_settings={"help_option_names": ["-h", "--help"]}
)

# Add sub-commands
app.add_typer(law_app, name="law")
app.command("report")(report)
app.command("simulate")(simulate)

@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit")
):
    """
    benfordlab: test country/year panel data against Benford's law.

    Use 'benfordlab COMMAND --help' to see options for specific commands.
    """
    if version:
        from benfordlab import __version__
        typer.echo(f"benfordlab version {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    set_console_level("DEBUG" if verbose else "INFO")

    # Store global options in context for sub-commands to access
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

if __name__ == "__main__":
    app()
