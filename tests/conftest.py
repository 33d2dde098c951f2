"""Shared fixtures: small extracts in the 2019 Q1 (schema A) and 2020 Q1 (schema B) layouts."""

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest


@pytest.fixture
def batch_a():
    return pd.DataFrame(
        {
            "trip_id": [7, 8, 9],
            "start_time": ["2019-01-01 08:00:00", "2019-01-05 10:00:00", "2019-01-06 12:30:00"],
            "end_time": ["2019-01-01 08:15:00", "2019-01-05 10:20:00", "2019-01-06 12:00:00"],
            "bikeid": [2167, 4386, 1524],
            "tripduration": ["900.0", "1,200.0", "-1,800.0"],
            "from_station_id": [199, 44, 15],
            "from_station_name": ["Clark St", "State St & Randolph St", "Racine Ave & 18th St"],
            "to_station_id": [84, 624, 644],
            "to_station_name": ["Milwaukee Ave & Grand Ave", "Dearborn St & Van Buren St", "Western Ave & Fillmore St"],
            "usertype": ["Subscriber", "Customer", "Subscriber"],
            "gender": ["Male", None, "Female"],
            "birthyear": [1989.0, None, 1994.0],
        }
    )


@pytest.fixture
def batch_b():
    return pd.DataFrame(
        {
            "ride_id": ["EACB19130B0CDA4A", "8FED874C809DC021", "789F3C21E472CA96"],
            "rideable_type": ["docked_bike", "docked_bike", "docked_bike"],
            "started_at": ["2020-01-21 20:06:59", "2020-01-30 14:22:39", "2020-03-01 09:00:00"],
            "ended_at": ["2020-01-21 20:14:30", "2020-01-30 14:26:22", "2020-03-01 09:05:00"],
            "start_station_name": ["Western Ave & Leland Ave", "Clark St & Montrose Ave", "HQ QR"],
            "start_station_id": [239, 234, 675],
            "end_station_name": ["Clark St & Leland Ave", "Southport Ave & Irving Park Rd", "HQ QR"],
            "end_station_id": [326.0, 318.0, None],
            "start_lat": [41.9665, 41.9616, 41.8899],
            "start_lng": [-87.6884, -87.666, -87.6803],
            "end_lat": [41.9671, 41.9542, 41.8899],
            "end_lng": [-87.6674, -87.6644, -87.6803],
            "member_casual": ["member", "casual", "casual"],
        }
    )


@pytest.fixture
def batches(batch_a, batch_b):
    return {"Divvy_Trips_2019_Q1": batch_a, "Divvy_Trips_2020_Q1": batch_b}
