"""Tests for the BenfordReport orchestrator.

Runs against a small synthetic panel with few trials so the full pipeline
(analysis, CSV, charts, Markdown) stays fast.
"""

import json

import pandas as pd
import pytest

from benfordlab.core.errors import EmptyDatasetError
from benfordlab.data.panel import PanelDataset
from benfordlab.reporting.analyzer import BenfordReport


def _minimal_config(**overrides):
    cfg = {
        "columns": ["pop", "gdpPercap"],
        "years": [2007],
        "include_all_years": True,
        "trials": 200,
        "seed": 11,
        "plotting": {"dpi": 40, "bins": 15, "figsize": [8, 3]},
    }
    cfg.update(overrides)
    return cfg


def test_scopes(panel_frame):
    report = BenfordReport(_minimal_config(years=[2002, 2007]), panel=PanelDataset(panel_frame))
    labels = [s[0] for s in report.scopes()]
    assert labels == [
        "Population, all years",
        "Population, 2002",
        "Population, 2007",
        "GDP per capita, all years",
        "GDP per capita, 2002",
        "GDP per capita, 2007",
    ]


def test_reference_distribution_cached_per_sample_size(panel_frame):
    report = BenfordReport(_minimal_config(), panel=PanelDataset(panel_frame))
    results = report.run_analyses()

    # pooled scopes share n=60, per-year scopes share n=30
    assert len(report._simulations) == 2
    by_label = {r.label: r for r in results}
    assert by_label["Population, 2007"].simulated is by_label["GDP per capita, 2007"].simulated
    assert by_label["Population, all years"].n == 60
    assert report.reference_distribution(30) is by_label["Population, 2007"].simulated


def test_seeded_runs_reproduce(panel_frame):
    a = BenfordReport(_minimal_config(), panel=PanelDataset(panel_frame)).run_analyses()
    b = BenfordReport(_minimal_config(), panel=PanelDataset(panel_frame)).run_analyses()
    assert [r.mc_p_value for r in a] == [r.mc_p_value for r in b]


def test_results_frame(panel_frame):
    report = BenfordReport(_minimal_config(), panel=PanelDataset(panel_frame))
    df = report.results_frame(report.run_analyses())
    assert len(df) == 4
    assert {"label", "statistic", "mc_p_value", "closed_form_p_value", "count_1", "proportion_9"} <= set(df.columns)
    assert (df["trials"] == 200).all()


def test_full_analysis_writes_artifacts(tmp_path, panel_frame):
    report = BenfordReport(_minimal_config(), panel=PanelDataset(panel_frame), output_dir=tmp_path / "run")
    results, artifacts = report.run_full_analysis()

    assert len(results) == 4
    assert artifacts["csv"].exists()
    assert artifacts["markdown"].exists()
    assert (tmp_path / "run" / "benford_report.log").exists()
    assert (tmp_path / "run" / "digits_all_years.png").exists()
    assert (tmp_path / "run" / "digits_2007.png").exists()
    assert (tmp_path / "run" / "simulated_population_2007.png").exists()

    csv = pd.read_csv(artifacts["csv"])
    assert list(csv["n"]) == [60, 30, 60, 30]

    text = artifacts["markdown"].read_text()
    assert "## Population, 2007" in text
    assert "digits_2007.png" in text
    assert "Monte Carlo" in text


def test_json_log_sink(tmp_path, panel_frame):
    report = BenfordReport(
        _minimal_config(json_log=True, skip_plots=True),
        panel=PanelDataset(panel_frame),
        output_dir=tmp_path / "run",
    )
    report.run_full_analysis()

    lines = (tmp_path / "run" / "benford_report.jsonl").read_text().splitlines()
    records = [json.loads(line)["record"] for line in lines]
    messages = [r["message"] for r in records]
    assert "Starting leading-digit report" in messages
    assert "Report complete" in messages
    assert all(r["level"]["name"] in {"INFO", "WARNING", "ERROR"} for r in records)


def test_json_log_off_by_default(tmp_path, panel_frame):
    report = BenfordReport(_minimal_config(skip_plots=True), panel=PanelDataset(panel_frame),
                           output_dir=tmp_path / "run")
    report.run_full_analysis()
    assert not (tmp_path / "run" / "benford_report.jsonl").exists()


def test_skip_flags(tmp_path, panel_frame):
    report = BenfordReport(
        _minimal_config(skip_plots=True, skip_save=True),
        panel=PanelDataset(panel_frame),
        output_dir=tmp_path / "run",
    )
    _, artifacts = report.run_full_analysis()
    assert set(artifacts) == {"markdown"}
    assert not list((tmp_path / "run").glob("*.png"))


def test_loads_panel_from_config_path(tmp_path, panel_csv):
    report = BenfordReport(_minimal_config(data_path=str(panel_csv), include_all_years=False))
    results = report.run_analyses()
    assert [r.n for r in results] == [30, 30]


def test_timestamped_output_dir(tmp_path, panel_frame):
    report = BenfordReport(
        _minimal_config(output_dir=str(tmp_path), skip_plots=True),
        panel=PanelDataset(panel_frame),
    )
    report.run_full_analysis()
    assert report.output_dir.parent == tmp_path / "benford_report"


def test_missing_year_fails_fast(panel_frame):
    report = BenfordReport(_minimal_config(years=[1900], include_all_years=False),
                           panel=PanelDataset(panel_frame))
    with pytest.raises(EmptyDatasetError):
        report.run_analyses()


def test_config_from_yaml_path(tmp_path, panel_frame):
    import yaml

    path = tmp_path / "cfg.yml"
    path.write_text(yaml.safe_dump(_minimal_config(trials=50)))
    report = BenfordReport(path, panel=PanelDataset(panel_frame))
    assert report.config.trials == 50
