"""Tests for the synthetic baseline generator."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

from services.generator import build_baseline_snapshot, simulated_variation


def test_baseline_has_full_aligned_windows() -> None:
    snapshot = build_baseline_snapshot(now=datetime(2024, 1, 1, 12, 0))

    for series in (
        snapshot.temperature,
        snapshot.humidity,
        snapshot.pressure,
        snapshot.co2,
        snapshot.uv,
        snapshot.voc,
    ):
        assert len(series) == 24
    assert snapshot.temperature[0].time == "12:00"
    assert snapshot.temperature[-1].time == "11:00"
    assert [p.time for p in snapshot.uv] == [p.time for p in snapshot.temperature]


def test_baseline_values_follow_generator_curves() -> None:
    snapshot = build_baseline_snapshot()

    assert snapshot.temperature[0].value == 22.0
    assert snapshot.temperature[0].average == 20.0
    assert snapshot.humidity[0].value == 75.0
    assert snapshot.pressure[0].value == 1013.0
    assert snapshot.co2[0].value == 400
    assert snapshot.uv[0].uva == 2.0
    assert snapshot.voc[0].tvoc == 270.0


def test_current_readings_mirror_newest_points() -> None:
    snapshot = build_baseline_snapshot(length=6)
    readings = snapshot.current_readings

    assert readings.temperature == snapshot.temperature[-1].value
    assert readings.humidity == snapshot.humidity[-1].value
    assert readings.pressure == snapshot.pressure[-1].value
    assert readings.co2 == snapshot.co2[-1].value
    assert readings.uva == snapshot.uv[-1].uva
    assert readings.uvb == snapshot.uv[-1].uvb
    assert readings.voc == snapshot.voc[-1].voc
    assert readings.tvoc == snapshot.voc[-1].tvoc


def test_voc_distribution_sums_to_one_hundred() -> None:
    snapshot = build_baseline_snapshot()

    assert [share.name for share in snapshot.voc_distribution][0] == "Methane"
    assert sum(share.value for share in snapshot.voc_distribution) == 100


def test_baseline_rejects_empty_window() -> None:
    with pytest.raises(ValueError):
        build_baseline_snapshot(length=0)


def test_simulated_variation_stays_within_jitter() -> None:
    readings = build_baseline_snapshot().current_readings
    rng = random.Random(7)

    for _ in range(50):
        variation = simulated_variation(readings, rng)
        assert set(variation) == {"temperature", "humidity", "co2", "pressure"}
        assert abs(variation["temperature"] - readings.temperature) <= 0.35
        assert abs(variation["humidity"] - readings.humidity) <= 0.6
        assert abs(variation["pressure"] - readings.pressure) <= 0.35
        assert abs(variation["co2"] - readings.co2) <= 11
        assert variation["co2"] == int(variation["co2"])
