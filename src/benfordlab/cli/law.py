# benfordlab/cli/law.py
import json

import typer
from rich import print
from rich.table import Table

from benfordlab.core.law import DEGREES_OF_FREEDOM, probability_table

law_app = typer.Typer(help="Inspect the leading-digit law.")

@law_app.command("show")
def show_law(
    format: str = typer.Option("plain", help="Output format: plain|json|md")
):
    """Show the probability of each leading digit under Benford's law."""
    table = probability_table()
    if format == "json":
        print(json.dumps({str(d): p for d, p in table.items()}, indent=2))
    elif format == "md":
        lines = ["| digit | probability |", "| --- | --- |"]
        lines += [f"| {d} | {p:.6f} |" for d, p in table.items()]
        print("\n".join(lines))
    elif format == "plain":
        rich_table = Table(title=f"Benford's law (df = {DEGREES_OF_FREEDOM})")
        rich_table.add_column("Digit", style="cyan")
        rich_table.add_column("P(d)", style="green")
        for d, p in table.items():
            rich_table.add_row(str(d), f"{p:.6f}")
        print(rich_table)
    else:
        print(f"[red]Unknown format:[/red] {format}")
        raise typer.Exit(1)
