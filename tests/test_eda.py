import math
import os
import sys

import pytest

from cyclistic import eda
from cyclistic.data_prep import normalize_batches
from cyclistic.eda import (
    category_counts, load_trips, ride_length_summary, save_bar_charts,
    summary_by_rider, weekday_summary,
)
from cyclistic.schema import DAY_ORDER


@pytest.fixture
def trips(batches):
    return normalize_batches(batches)


def test_ride_length_summary(trips):
    s = ride_length_summary(trips)
    assert s["mean"] == pytest.approx(693.5)
    assert s["median"] == pytest.approx(675.5)
    assert s["max"] == 1200
    assert s["min"] == 223


def test_summary_by_rider(trips):
    by_rider = summary_by_rider(trips)
    assert list(by_rider.index) == ["casual", "member"]
    assert by_rider.loc["member", "mean"] == pytest.approx(675.5)
    assert by_rider.loc["casual", "max"] == 1200
    assert by_rider.loc["casual", "min"] == 223


def test_category_counts_includes_both_segments(trips):
    counts = category_counts(trips)
    assert counts.to_dict() == {"casual": 2, "member": 2}
    assert category_counts(trips[trips["rider_category"] == "member"])["casual"] == 0


def test_weekday_summary(trips):
    weekday = weekday_summary(trips)
    assert len(weekday) == 2 * len(DAY_ORDER)
    member = weekday[weekday["rider_category"] == "member"]
    assert [str(d) for d in member["day_of_week"]] == DAY_ORDER
    tuesday = member[member["day_of_week"] == "Tuesday"].iloc[0]
    assert tuesday["number_of_rides"] == 2
    assert tuesday["average_duration"] == pytest.approx(675.5)
    monday = member[member["day_of_week"] == "Monday"].iloc[0]
    assert monday["number_of_rides"] == 0
    assert math.isnan(monday["average_duration"])


def test_save_bar_charts(tmp_path, trips):
    paths = save_bar_charts(weekday_summary(trips), str(tmp_path))
    assert len(paths) == 2
    for path in paths:
        assert os.path.getsize(path) > 0


def test_load_trips_restores_types(tmp_path, trips):
    path = tmp_path / "all_trips_v2.csv"
    trips.to_csv(path, index=False)
    loaded = load_trips(path)
    assert loaded["month"].iloc[0] == "01"
    assert loaded["year"].iloc[0] == "2019"
    assert loaded["identifier"].iloc[0] == "7"
    assert loaded["end_station_id"].iloc[2] == "326"
    assert loaded["day"].iloc[1] == "05"
    assert list(loaded["day_of_week"].cat.categories) == DAY_ORDER


def test_main_writes_report(tmp_path, trips, monkeypatch):
    data_path = tmp_path / "all_trips_v2.csv"
    out_dir = tmp_path / "outputs"
    trips.to_csv(data_path, index=False)
    monkeypatch.setattr(sys, "argv", ["eda", "--data", str(data_path), "--out", str(out_dir)])

    eda.main()

    summary = (out_dir / "summary_metrics.txt").read_text()
    assert "Metric: ride_length_seconds" in summary
    assert "Metric: ride_length_seconds[casual]" in summary
    assert (out_dir / "avg_ride_length.csv").exists()
    assert (out_dir / "rides_by_weekday.png").exists()
    assert (out_dir / "avg_duration_by_weekday.png").exists()
