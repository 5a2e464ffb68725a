"""
Country/year panel datasets.

A PanelDataset wraps one table of records (country, year, pop, gdpPercap,
...) and is handed explicitly to every analysis. The frame is copied on the
way in and on the way out, so callers cannot mutate it through the handle.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd

from benfordlab.core.errors import InvalidArgumentError, InvalidInputError
from benfordlab.core.logging import logger

__all__ = [
    "REQUIRED_COLUMNS",
    "PanelDataset",
    "load_panel",
    "select_column",
]

REQUIRED_COLUMNS = ("country", "year", "pop", "gdpPercap")


@dataclass(frozen=True, eq=False)
class PanelDataset:
    """Immutable handle around a panel of entity/year records."""
    frame: pd.DataFrame
    source: str = "in-memory"
    entity_column: str = "country"
    year_column: str = "year"

    def __post_init__(self):
        missing = [c for c in (self.entity_column, self.year_column) if c not in self.frame.columns]
        if missing:
            raise InvalidArgumentError(f"Panel is missing required columns: {missing}")
        object.__setattr__(self, "frame", self.frame.copy())

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def columns(self) -> List[str]:
        return list(self.frame.columns)

    @property
    def years(self) -> List[int]:
        return sorted(int(y) for y in self.frame[self.year_column].unique())

    def entity_count(self, year: Optional[int] = None) -> int:
        """Distinct entities, overall or within one year."""
        df = self.frame if year is None else self.frame[self.frame[self.year_column] == year]
        return int(df[self.entity_column].nunique())

    def to_frame(self) -> pd.DataFrame:
        return self.frame.copy()


def _read_table(path: Path) -> pd.DataFrame:
    if path.suffix.lower() in (".tsv", ".tab"):
        return pd.read_csv(path, sep="\t")
    return pd.read_csv(path)


def load_panel(path: Optional[Union[str, Path]] = None) -> PanelDataset:
    """
    Load the panel from a CSV/TSV file, or the bundled Gapminder extract.

    Args:
        path: Table with at least country, year, pop and gdpPercap. When
            None, the Gapminder panel from the ``gapminder`` package is used
            (142 countries x 12 years, 1952-2007).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        InvalidArgumentError: If a required column is missing.
    """
    if path is None:
        from gapminder import gapminder

        frame = gapminder.copy()
        source = "gapminder"
    else:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Data file not found: {path}")
        frame = _read_table(path)
        source = str(path)

    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise InvalidArgumentError(f"Dataset {source} is missing required columns: {missing}")

    frame["year"] = frame["year"].astype(int)
    logger.info(f"Loaded panel from {source}: {len(frame)} rows, {frame['country'].nunique()} entities")
    return PanelDataset(frame=frame, source=source)


def select_column(
    panel: PanelDataset,
    column: str,
    year: Optional[int] = None,
    drop_nonpositive: bool = False,
) -> np.ndarray:
    """
    Values of ``column``, optionally restricted to one year.

    An unknown year gives an empty array; analysing it later raises
    EmptyDatasetError.

    Raises:
        InvalidArgumentError: If ``column`` is not in the panel.
        InvalidInputError: If a value is missing, non-finite or <= 0 and
            ``drop_nonpositive`` is False.
    """
    if column not in panel.frame.columns:
        raise InvalidArgumentError(f"Unknown column {column!r}; available: {panel.columns}")

    df = panel.frame
    if year is not None:
        df = df[df[panel.year_column] == year]

    values = pd.to_numeric(df[column], errors="coerce").to_numpy(dtype=float)
    valid = np.isfinite(values) & (values > 0)
    n_bad = int((~valid).sum())
    if n_bad:
        scope = f"{column} ({year})" if year is not None else column
        if not drop_nonpositive:
            raise InvalidInputError(f"{n_bad} missing, non-finite or non-positive values in {scope}")
        logger.warning(f"Dropping {n_bad} missing, non-finite or non-positive values from {scope}")
        values = values[valid]
    return values
