import numpy as np
import pandas as pd
import pytest


def _panel_frame(n_countries=30, years=(2002, 2007), seed=0):
    """Synthetic country/year panel with values spread over several decades."""
    rng = np.random.default_rng(seed)
    rows = []
    for i in range(n_countries):
        for year in years:
            rows.append({
                "country": f"Country {i:03d}",
                "continent": ["Africa", "Americas", "Asia", "Europe", "Oceania"][i % 5],
                "year": year,
                "lifeExp": float(rng.uniform(40, 85)),
                "pop": int(10 ** rng.uniform(5, 9)),
                "gdpPercap": float(10 ** rng.uniform(2.5, 4.8)),
            })
    return pd.DataFrame(rows)


@pytest.fixture
def panel_frame():
    return _panel_frame()


@pytest.fixture
def panel_csv(tmp_path, panel_frame):
    path = tmp_path / "panel.csv"
    panel_frame.to_csv(path, index=False)
    return path
