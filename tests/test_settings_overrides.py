from __future__ import annotations

from settings import get_settings


def test_defaults_apply(monkeypatch) -> None:
    for name in (
        "HISTORY_LENGTH",
        "SIMULATION_INTERVAL_SECONDS",
        "SIMULATION_SEED",
        "TREND_THRESHOLD",
        "TREND_THRESHOLD_CO2",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.history_length == 24
        assert settings.simulation_interval == 0.0
        assert settings.simulation_seed is None
        assert settings.trend_threshold == 0.5
        assert settings.threshold_for("co2") == 0.5
        assert settings.log_level == "INFO"
    finally:
        get_settings.cache_clear()


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("HISTORY_LENGTH", "48")
    monkeypatch.setenv("SIMULATION_INTERVAL_SECONDS", "2.5")
    monkeypatch.setenv("SIMULATION_SEED", "42")
    monkeypatch.setenv("TREND_THRESHOLD", "1")
    monkeypatch.setenv("TREND_THRESHOLD_CO2", "25")
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.history_length == 48
        assert settings.simulation_interval == 2.5
        assert settings.simulation_seed == 42
        assert settings.threshold_for("temperature") == 1.0
        assert settings.threshold_for("co2") == 25.0
        assert settings.log_level == "DEBUG"
    finally:
        get_settings.cache_clear()


def test_malformed_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("HISTORY_LENGTH", "zero")
    monkeypatch.setenv("SIMULATION_INTERVAL_SECONDS", "-5")
    monkeypatch.setenv("SIMULATION_SEED", "abc")
    monkeypatch.setenv("TREND_THRESHOLD", "")
    monkeypatch.setenv("TREND_THRESHOLD_VOC", "fast")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.history_length == 24
        assert settings.simulation_interval == 0.0
        assert settings.simulation_seed is None
        assert settings.trend_threshold == 0.5
        assert settings.threshold_for("voc") == 0.5
    finally:
        get_settings.cache_clear()
