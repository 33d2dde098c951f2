# cyclistic/data_prep.py
import argparse
from pathlib import Path
import pandas as pd

from cyclistic.combine_csv import combine_batches, load_batches
from cyclistic.schema import (
    CATEGORY_MAP, COLUMN_ALIASES, DAY_ORDER, MAINTENANCE_STATION, OUTPUT_COLUMNS,
    UnknownCategoryError,
)

def parse_args():
    p = argparse.ArgumentParser(description="Normalize quarterly trip CSVs into one analysis-ready CSV")
    p.add_argument('--batch', action='append', required=True,
                   help='path to a quarterly trip CSV (repeat once per batch, in order)')
    p.add_argument('--out', default='data/all_trips_v2.csv', help='path to write the cleaned CSV')
    return p.parse_args()

def relabel_categories(trips, category_map=CATEGORY_MAP):
    """Collapse raw rider labels (Subscriber/Customer/member/casual) into member/casual."""
    labels = trips['rider_category']
    mapped = labels.map(category_map)
    unknown = labels[mapped.isna()]
    if len(unknown):
        raise UnknownCategoryError(sorted(unknown.astype(str).unique()))
    out = trips.copy()
    out['rider_category'] = mapped.astype('string')
    return out

def add_calendar_fields(trips, day_order=DAY_ORDER):
    """
    Derive date, year, month, day and day_of_week from started_at.

    year/month/day are zero-padded strings ('2019', '01', '05') and
    day_of_week is an ordered categorical running Sunday to Saturday.
    """
    out = trips.copy()
    started = out['started_at']
    out['date'] = started.dt.date
    out['year'] = started.dt.strftime('%Y')
    out['month'] = started.dt.strftime('%m')
    out['day'] = started.dt.strftime('%d')
    out['day_of_week'] = pd.Categorical(started.dt.day_name(), categories=day_order, ordered=True)
    return out

def add_ride_length(trips):
    out = trips.copy()
    out['ride_length_seconds'] = (out['ended_at'] - out['started_at']).dt.total_seconds()
    return out

def filter_trips(trips, sentinel=MAINTENANCE_STATION):
    """Drop maintenance (sentinel station) rows and negative-length rides into a new frame."""
    keep = (trips['start_station_name'] != sentinel) & (trips['ride_length_seconds'] >= 0)
    return trips[keep.fillna(False)].reset_index(drop=True)

def prepare_trips(batches, column_map=COLUMN_ALIASES, category_map=CATEGORY_MAP, day_order=DAY_ORDER):
    # everything short of filtering, so dropped rows stay inspectable
    trips = combine_batches(batches, column_map=column_map)
    trips = relabel_categories(trips, category_map=category_map)
    trips = add_calendar_fields(trips, day_order=day_order)
    trips = add_ride_length(trips)
    return trips[OUTPUT_COLUMNS]

def normalize_batches(batches, column_map=COLUMN_ALIASES, category_map=CATEGORY_MAP,
                      day_order=DAY_ORDER, sentinel=MAINTENANCE_STATION):
    trips = prepare_trips(batches, column_map=column_map, category_map=category_map, day_order=day_order)
    return filter_trips(trips, sentinel=sentinel)

def main():
    args = parse_args()
    batches = load_batches(args.batch)
    for name, df in batches.items():
        print(f"Loaded {name}: {len(df):,} rows, {df.shape[1]} columns")

    all_trips = prepare_trips(batches)
    print(f"Combined {len(all_trips):,} trips")
    print("Rider categories:", all_trips['rider_category'].value_counts().to_dict())

    all_trips_v2 = filter_trips(all_trips)
    print(f"Dropped {len(all_trips) - len(all_trips_v2):,} maintenance or negative-length trips")

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    all_trips_v2.to_csv(out_path, index=False)
    print(f"Saved cleaned data ({len(all_trips_v2):,} rows) to {out_path}")

if __name__ == '__main__':
    main()
