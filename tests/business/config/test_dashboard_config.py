"""Tests for dashboard configuration loading."""

import pytest

from src.business.config.dashboard_config import (
    CONFIG_ENV_VAR,
    ColorConfig,
    ConfigError,
    DashboardConfig,
    parse_attribute,
)
from src.data.models import Attribute


class TestDefaults:
    """Tests for built-in defaults."""

    def test_defaults(self):
        config = DashboardConfig()
        assert config.refresh_interval == 5.0
        assert config.exchanges == {"Dow": "^DJI", "S&P500": "^GSPC", "NASDAQ": "^IXIC"}
        assert config.tracked == ["EA", "GOOGL", "TSLA", "AMZN", "SPY", "IBM"]
        assert config.sort_keys == [Attribute.CHANGE_PERCENT, Attribute.NAME]
        assert config.color == ColorConfig(Attribute.CHANGE_PERCENT, 0.5)
        assert config.provider.rate_limit == 0.5

    def test_defaults_valid(self):
        assert DashboardConfig().validate() is not None

    def test_instances_do_not_share_lists(self):
        a = DashboardConfig()
        a.tracked.append("MSFT")
        assert "MSFT" not in DashboardConfig().tracked


class TestFromDict:
    """Tests for DashboardConfig.from_dict."""

    def test_empty_dict_gives_defaults(self):
        assert DashboardConfig.from_dict({}) == DashboardConfig()

    def test_overrides(self):
        config = DashboardConfig.from_dict(
            {
                "refresh_interval": 10,
                "exchanges": {"FTSE": "^FTSE"},
                "tracked": ["MSFT", "AAPL"],
                "sort_keys": ["NAME", "volume"],
                "color": {"threshold": 1.5},
                "provider": {"rate_limit": 0},
            }
        )
        assert config.refresh_interval == 10.0
        assert config.exchanges == {"FTSE": "^FTSE"}
        assert config.tracked == ["MSFT", "AAPL"]
        assert config.sort_keys == [Attribute.NAME, Attribute.VOLUME]
        assert config.color == ColorConfig(Attribute.CHANGE_PERCENT, 1.5)
        assert config.provider.rate_limit == 0.0

    def test_empty_exchanges_allowed(self):
        assert DashboardConfig.from_dict({"exchanges": None}).exchanges == {}

    @pytest.mark.parametrize(
        "data",
        [
            {"refresh_interval": 0},
            {"refresh_interval": "soon"},
            {"tracked": []},
            {"tracked": "EA"},
            {"tracked": ["EA", "EA"]},
            {"exchanges": ["^DJI"]},
            {"exchanges": {"A": "^DJI", "B": "^DJI"}},
            {"sort_keys": []},
            {"sort_keys": ["bogus"]},
            {"sort_keys": ["exchange"]},
            {"sort_keys": ["name", "name"]},
            {"color": {"attribute": "name"}},
            {"color": {"threshold": -1}},
            {"provider": {"rate_limit": -0.1}},
            {"refresh_interval": float("nan")},
            {"refresh_interval": float("inf")},
            {"color": {"threshold": float("nan")}},
            {"color": {"threshold": float("inf")}},
            {"provider": {"rate_limit": float("nan")}},
            {"color": 5},
            {"color": ["change_percent"]},
            {"provider": 0.5},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(ConfigError):
            DashboardConfig.from_dict(data)

    def test_non_mapping_rejected(self):
        with pytest.raises(ConfigError):
            DashboardConfig.from_dict(["EA"])  # type: ignore[arg-type]


class TestParseAttribute:
    """Tests for parse_attribute."""

    @pytest.mark.parametrize("text", ["change_percent", "CHANGE_PERCENT", " Change_Percent "])
    def test_case_insensitive(self, text):
        assert parse_attribute(text) is Attribute.CHANGE_PERCENT

    def test_unknown(self):
        with pytest.raises(ConfigError):
            parse_attribute("market_cap")


class TestLoad:
    """Tests for config file lookup."""

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("refresh_interval: 2\ntracked:\n  - NVDA\n", encoding="utf-8")

        config = DashboardConfig.load(path)

        assert config.refresh_interval == 2.0
        assert config.tracked == ["NVDA"]
        assert config.exchanges == DashboardConfig().exchanges

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert DashboardConfig.load(path) == DashboardConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            DashboardConfig.load(tmp_path / "nope.yaml")

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("tracked: [IBM]\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert DashboardConfig.load().tracked == ["IBM"]

    def test_bundled_default_file(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.setattr("src.business.config.dashboard_config.load_dotenv", lambda: False)

        assert DashboardConfig.load() == DashboardConfig()

    def test_non_finite_yaml_interval(self, tmp_path):
        path = tmp_path / "inf.yaml"
        path.write_text("refresh_interval: .inf\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            DashboardConfig.load(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("tracked: [EA, GOOGL\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="YAML"):
            DashboardConfig.load(path)
