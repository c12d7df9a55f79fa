from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
import pytest
import typer
from typer.testing import CliRunner

from cli.app import app
from cli.client import ApiClient
from cli.config import CLIConfig, load_config


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.sent: List[Dict[str, float]] = []
        self.advance_calls: List[tuple[bool, Optional[str]]] = []
        self.snapshot_payload: Dict[str, Any] = {
            "temperature": [
                {"time": "10:00", "value": 21.0, "average": 20.0},
                {"time": "11:00", "value": 22.0, "average": 20.0},
            ],
            "currentReadings": {"temperature": 22.0, "humidity": 55.0},
        }
        self.analysis_payload: Dict[str, Any] = {
            "habitabilityScore": {
                "overall": 86,
                "temperature": 90.0,
                "humidity": 90.0,
                "airQuality": 90.0,
                "radiation": 75.0,
            },
            "status": "highly habitable",
            "recommendation": "Suitable.",
            "predictions": [
                {
                    "parameter": "Temperature",
                    "currentValue": 24.0,
                    "predictedValue": 26.0,
                    "trend": "increasing",
                    "unit": "°C",
                    "timeframe": "tomorrow",
                }
            ],
            "forecastSummary": "Within tolerable limits.",
        }
        self.closed = False

    def send_reading(self, readings: Dict[str, float]) -> Dict[str, Any]:
        self.sent.append(readings)
        return {
            "success": True,
            "message": "Data received successfully",
            "timestamp": "2024-01-01T00:00:00Z",
            "dataReceived": readings,
        }

    def get_snapshot(self) -> Dict[str, Any]:
        return self.snapshot_payload

    def advance(self, simulate: bool = False, time_label: Optional[str] = None) -> Dict[str, Any]:
        self.advance_calls.append((simulate, time_label))
        return self.snapshot_payload

    def get_analysis(self) -> Dict[str, Any]:
        return self.analysis_payload

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def stub(monkeypatch) -> StubClient:
    client = StubClient(config=None)

    def factory(config):
        client.config = config
        return client

    monkeypatch.setattr("cli.app.ApiClient", factory)
    return client


def test_send_posts_parsed_readings(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["send", "temperature=22.5", "co2=950"])

    assert result.exit_code == 0
    assert stub.sent == [{"temperature": 22.5, "co2": 950.0}]
    assert "Data received successfully" in result.stdout
    assert stub.closed is True


def test_send_rejects_unknown_reading(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["send", "radiation=3"])

    assert result.exit_code != 0
    assert stub.sent == []


def test_send_rejects_non_numeric_value(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["send", "humidity=wet"])

    assert result.exit_code != 0
    assert stub.sent == []


def test_snapshot_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["--base-url", "http://sensors:9000/", "snapshot"])

    assert result.exit_code == 0
    assert "temperature: 22.0" in result.stdout
    assert "window: 2 points" in result.stdout
    assert stub.config.base_url == "http://sensors:9000"


def test_tick_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["tick", "--simulate", "--label", "12:00"])

    assert result.exit_code == 0
    assert stub.advance_calls == [(True, "12:00")]


def test_analysis_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["analysis"])

    assert result.exit_code == 0
    assert "overall: 86" in result.stdout
    assert "Temperature (tomorrow): 24.0 °C -> 26.0 °C ↑ increasing" in result.stdout
    assert "Within tolerable limits." in result.stdout


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://example.test/")
    monkeypatch.setenv("CLI_REQUEST_TIMEOUT", "-1")

    config = load_config()

    assert config == CLIConfig(base_url="http://example.test", timeout=10.0)


def test_api_client_reports_http_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"success": False, "message": "Failed to process data"})

    client = ApiClient(CLIConfig())
    client.close()
    client._client = httpx.Client(
        base_url="http://testserver", transport=httpx.MockTransport(handler)
    )
    try:
        with pytest.raises(typer.Exit):
            client.send_reading({"temperature": 1.0})
    finally:
        client.close()


def test_api_client_returns_json_payload() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "highly habitable"})

    client = ApiClient(CLIConfig())
    client.close()
    client._client = httpx.Client(
        base_url="http://testserver", transport=httpx.MockTransport(handler)
    )
    try:
        assert client.get_analysis() == {"status": "highly habitable"}
        client.advance(simulate=True, time_label="08:00")
    finally:
        client.close()

    assert seen[0].url.path == "/api/analysis"
    assert seen[1].url.path == "/api/webhook/tick"
    assert b'"timeLabel"' in seen[1].content
