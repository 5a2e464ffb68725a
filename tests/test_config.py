import pytest
import yaml
from pydantic import ValidationError

from benfordlab.config import PlottingConfig, ReportConfig, load_report_config
from benfordlab.core.goodness_of_fit import DEFAULT_TRIALS
from benfordlab.core.utils import load_config, make_output_dir


def _write(tmp_path, data, name="cfg.yml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data))
    return path


def test_defaults():
    cfg = ReportConfig()
    assert cfg.columns == ["pop", "gdpPercap"]
    assert cfg.years == [2007]
    assert cfg.trials == DEFAULT_TRIALS
    assert cfg.alpha == 0.05
    assert cfg.label_for("gdpPercap") == "GDP per capita"
    assert cfg.label_for("lifeExp") == "lifeExp"
    assert isinstance(cfg.plotting, PlottingConfig)


def test_config_is_frozen():
    cfg = ReportConfig()
    with pytest.raises(ValidationError):
        cfg.trials = 5


@pytest.mark.parametrize(
    "bad",
    [
        {"trials": 0},
        {"alpha": 1.5},
        {"columns": []},
        {"log_level": "LOUD"},
        {"unknown_key": 1},
        {"plotting": {"dpi": -1}},
    ],
)
def test_invalid_values_rejected(bad):
    with pytest.raises(ValidationError):
        ReportConfig.model_validate(bad)


def test_load_report_config_with_overrides(tmp_path):
    path = _write(tmp_path, {"trials": 500, "years": [1952], "plotting": {"bins": 20}})
    cfg, resolved = load_report_config(path, ["trials=250", "plotting.dpi=72", "years=[1952, 2007]"])
    assert cfg.trials == 250
    assert cfg.years == [1952, 2007]
    assert cfg.plotting.dpi == 72
    assert cfg.plotting.bins == 20
    assert resolved == str(path.resolve())


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")


def test_malformed_override(tmp_path):
    path = _write(tmp_path, {})
    with pytest.raises(ValueError):
        load_config(path, ["trials"])


def test_override_with_invalid_yaml_value(tmp_path):
    path = _write(tmp_path, {})
    with pytest.raises(ValueError, match="not valid YAML"):
        load_config(path, ["years=[1952,"])


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    cfg, _ = load_report_config(path)
    assert cfg == ReportConfig()


def test_shipped_default_config_is_valid():
    from pathlib import Path

    path = Path(__file__).resolve().parents[1] / "configs" / "default_benford_report.yml"
    cfg, _ = load_report_config(path)
    assert cfg.seed == 2024
    assert cfg.data_path is None


def test_make_output_dir_is_unique(tmp_path):
    a = make_output_dir("run", base_output_dir=tmp_path)
    b = make_output_dir("run", base_output_dir=tmp_path)
    assert a != b
    assert a.is_dir() and b.is_dir()
    assert a.parent == tmp_path / "run"
