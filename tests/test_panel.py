"""Tests for the panel dataset collaborator."""

import numpy as np
import pandas as pd
import pytest

from benfordlab.core.errors import InvalidArgumentError, InvalidInputError
from benfordlab.data.panel import PanelDataset, load_panel, select_column


def test_load_panel_from_csv(panel_csv):
    panel = load_panel(panel_csv)
    assert len(panel) == 60
    assert panel.years == [2002, 2007]
    assert panel.source == str(panel_csv)


def test_load_panel_from_tsv(tmp_path, panel_frame):
    path = tmp_path / "panel.tsv"
    panel_frame.to_csv(path, sep="\t", index=False)
    assert len(load_panel(path)) == 60


def test_load_panel_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_panel(tmp_path / "nope.csv")


def test_load_panel_missing_required_column(tmp_path, panel_frame):
    path = tmp_path / "bad.csv"
    panel_frame.drop(columns=["gdpPercap"]).to_csv(path, index=False)
    with pytest.raises(InvalidArgumentError, match="gdpPercap"):
        load_panel(path)


def test_select_column_by_year_matches_panel_size(panel_csv):
    panel = load_panel(panel_csv)
    values = select_column(panel, "pop", year=2007)
    assert len(values) == panel.entity_count(2007) == 30
    assert len(select_column(panel, "gdpPercap")) == 60


def test_select_column_unknown_year_is_empty(panel_csv):
    panel = load_panel(panel_csv)
    assert select_column(panel, "pop", year=1900).size == 0


def test_select_column_unknown_column(panel_csv):
    with pytest.raises(InvalidArgumentError, match="lifeexp"):
        select_column(load_panel(panel_csv), "lifeexp")


def test_nonpositive_values_rejected_or_dropped(panel_frame):
    frame = panel_frame.copy()
    frame["pop"] = frame["pop"].astype(float)
    frame.loc[0, "pop"] = 0
    frame.loc[1, "pop"] = np.nan
    panel = PanelDataset(frame)

    with pytest.raises(InvalidInputError):
        select_column(panel, "pop")

    kept = select_column(panel, "pop", drop_nonpositive=True)
    assert len(kept) == len(frame) - 2
    assert np.all(kept > 0)


def test_panel_handle_is_isolated_from_caller(panel_frame):
    panel = PanelDataset(panel_frame)
    panel_frame.loc[0, "pop"] = -1
    assert select_column(panel, "pop").min() > 0

    copy = panel.to_frame()
    copy.loc[0, "pop"] = -1
    assert select_column(panel, "pop").min() > 0


def test_panel_requires_entity_and_year_columns():
    with pytest.raises(InvalidArgumentError):
        PanelDataset(pd.DataFrame({"pop": [1, 2]}))


def test_gapminder_panel_has_142_countries_per_year():
    pytest.importorskip("gapminder")
    panel = load_panel()
    assert len(panel) == 1704
    assert panel.years == list(range(1952, 2008, 5))
    for column in ("pop", "gdpPercap"):
        assert len(select_column(panel, column, year=2007)) == 142
