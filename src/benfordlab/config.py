"""
Report configuration.

YAML files are loaded with ``benfordlab.core.utils.load_config`` and then
validated into a frozen ``ReportConfig``.

Example (configs/default_benford_report.yml):

    columns: [pop, gdpPercap]
    years: [2007]
    include_all_years: true
    trials: 10000
    alpha: 0.05
    seed: 2024
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from benfordlab.core.goodness_of_fit import DEFAULT_TRIALS
from benfordlab.core.utils import load_config

__all__ = [
    "PlottingConfig",
    "ReportConfig",
    "load_report_config",
]


class PlottingConfig(BaseModel):
    """Figure knobs shared by every chart in the report."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    style: str = Field("seaborn-v0_8-whitegrid", description="Matplotlib style sheet")
    dpi: int = Field(150, gt=0)
    figsize: Tuple[float, float] = Field((12.0, 5.0), description="Width, height in inches")
    bins: int = Field(60, gt=0, description="Histogram bins for simulated statistics")
    title_fontsize: int = 14
    label_fontsize: int = 11
    legend_fontsize: int = 10


class ReportConfig(BaseModel):
    """Complete configuration of one report run."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    data_path: Optional[Path] = Field(None, description="CSV/TSV panel; None loads Gapminder")
    columns: List[str] = Field(default_factory=lambda: ["pop", "gdpPercap"])
    column_labels: dict = Field(
        default_factory=lambda: {"pop": "Population", "gdpPercap": "GDP per capita"},
        description="Display names used in charts and narrative",
    )
    years: List[int] = Field(default_factory=lambda: [2007])
    include_all_years: bool = Field(True, description="Also analyse the pooled panel")
    drop_nonpositive: bool = False

    trials: int = Field(DEFAULT_TRIALS, gt=0)
    alpha: float = Field(0.05, gt=0.0, lt=1.0)
    seed: Optional[int] = None
    processes: int = Field(1, gt=0)

    output_dir: Path = Path("outputs")
    report_name: str = "benford_report"
    skip_plots: bool = False
    skip_save: bool = False
    log_level: str = "INFO"
    json_log: bool = Field(False, description="Also write a serialized JSON-lines run log")

    plotting: PlottingConfig = Field(default_factory=PlottingConfig)

    @field_validator("columns")
    @classmethod
    def columns_not_empty(cls, v):
        if not v:
            raise ValueError("At least one column must be analysed")
        return v

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v):
        v = v.upper()
        if v not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

    def label_for(self, column: str) -> str:
        return self.column_labels.get(column, column)


def load_report_config(
    config_path: Union[str, Path],
    cli_overrides: Optional[List[str]] = None,
) -> Tuple[ReportConfig, str]:
    """Load, override and validate a YAML report config."""
    raw, resolved = load_config(config_path, cli_overrides=cli_overrides)
    return ReportConfig.model_validate(raw), resolved
