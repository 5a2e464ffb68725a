"""
Report and simulation commands.
"""
from pathlib import Path
from typing import List, Optional

import numpy as np
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from benfordlab.cli.common import parse_seed, resolve_config_path, resolve_output_path
from benfordlab.config import load_report_config
from benfordlab.core.errors import BenfordError
from benfordlab.core.goodness_of_fit import (
    DEFAULT_TRIALS,
    closed_form_p_value,
    critical_value,
    estimate_p_value,
    simulate_distribution,
)
from benfordlab.core.logging import logger
from benfordlab.core.utils import make_rng, set_global_seed

console = Console()

SCRIPT_NAME = "benford_report"

def report(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (default: auto-detect)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory (default: timestamped run directory)"),
    seed: Optional[str] = typer.Option(None, "--seed", help="Random seed (integer or 'random' for time-based)"),
    trials: Optional[int] = typer.Option(None, "--trials", "-t", min=1, help="Monte Carlo trials per sample size"),
    override: Optional[List[str]] = typer.Option(None, "--set", help="Config override, e.g. --set years=[1952,2007]"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done without executing")
):
    """Run the full leading-digit report (CSV, charts, Markdown)."""
    from benfordlab.reporting.analyzer import BenfordReport

    try:
        config_path = resolve_config_path(config, SCRIPT_NAME)
        overrides = list(override or [])
        parsed_seed = parse_seed(seed)
        if parsed_seed is not None:
            overrides.append(f"seed={parsed_seed}")
        if trials is not None:
            overrides.append(f"trials={trials}")
        cfg, resolved = load_report_config(config_path, cli_overrides=overrides)
        output_path = resolve_output_path(output)

        console.print(f"[bold green]Running {SCRIPT_NAME}[/bold green]")
        console.print(f"Config: {resolved}")
        console.print(f"Output: {output_path or cfg.output_dir}")
        console.print(f"Trials: {cfg.trials}")
        if cfg.seed is not None:
            console.print(f"Seed: {cfg.seed}")

        if dry_run:
            console.print("[yellow]DRY RUN - not executing[/yellow]")
            return

        if cfg.seed is not None:
            set_global_seed(cfg.seed)

        analyzer = BenfordReport(cfg, output_dir=output_path)
        results, artifacts = analyzer.run_full_analysis()
    except (BenfordError, ValidationError, ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]✗ Error running {SCRIPT_NAME}: {e}[/bold red]")
        raise typer.Exit(1)

    table = Table(title="Leading-digit tests")
    table.add_column("Dataset", style="cyan")
    table.add_column("n", justify="right")
    table.add_column("chi2", justify="right")
    table.add_column("p (MC)", justify="right")
    table.add_column("p (chi2)", justify="right")
    table.add_column("Verdict", style="green")
    for r in results:
        table.add_row(r.label, str(r.n), f"{r.statistic:.2f}", f"{r.mc_p_value:.4f}",
                      f"{r.closed_form_p_value:.4f}", r.verdict.value)
    console.print(table)
    for kind, path in artifacts.items():
        console.print(f"{kind}: {path}")
    console.print(f"[bold green]✓ {SCRIPT_NAME} completed successfully[/bold green]")

def simulate(
    n: int = typer.Argument(..., help="Sample size of each simulated dataset"),
    trials: int = typer.Option(DEFAULT_TRIALS, "--trials", "-t", help="Number of simulated datasets"),
    statistic: Optional[float] = typer.Option(None, "--statistic", "-x", help="Observed statistic to test (default: 5% critical value)"),
    alpha: float = typer.Option(0.05, "--alpha", help="Significance level for the critical value"),
    seed: Optional[str] = typer.Option(None, "--seed", help="Random seed (integer or 'random' for time-based)"),
    processes: int = typer.Option(1, "--processes", "-p", help="Worker processes for the simulation"),
):
    """Compare Monte Carlo and closed-form chi-square p-values at sample size N."""
    try:
        crit = critical_value(alpha)
        observed = crit if statistic is None else statistic
        rng = make_rng(parse_seed(seed))
        logger.info(f"Simulating {trials} datasets of size n={n}")
        sim = simulate_distribution(n, trials, rng=rng, processes=processes)
        p_mc = estimate_p_value(sim, observed)
    except BenfordError as e:
        console.print(f"[bold red]✗ Simulation failed: {e}[/bold red]")
        raise typer.Exit(1)

    table = Table(title=f"Chi-square reference distribution, n={n}")
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Trials", str(trials))
    table.add_row("Observed statistic", f"{observed:.4f}")
    table.add_row(f"Critical value ({1 - alpha:.0%})", f"{crit:.4f}")
    table.add_row("Simulated mean", f"{sim.mean():.4f}")
    table.add_row("Simulated 95th percentile", f"{float(np.quantile(sim, 0.95)):.4f}")
    table.add_row("p-value (Monte Carlo)", f"{p_mc:.4f}")
    table.add_row("p-value (chi-square)", f"{closed_form_p_value(observed):.4f}")
    console.print(table)
