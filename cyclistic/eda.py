"""
Descriptive comparison of casual riders and members on the cleaned trip table.

Outputs:
1) ride length statistics, overall and per rider category
2) rides and average ride length per weekday and rider category (CSV + bar charts)
"""

import argparse
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
import os

from cyclistic.schema import DAY_ORDER, RIDER_CATEGORIES
from cyclistic.utils import load_csv, safe_mean, seconds_to_minutes

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument('--data', required=True, help='cleaned trip CSV (output of cyclistic.data_prep)')
    p.add_argument('--out', default='outputs', help='output dir')
    return p.parse_args()

def load_trips(path, day_order=DAY_ORDER):
    # read ids and calendar parts as text so '01' and '326' survive the round trip
    text_cols = ['identifier', 'vehicle_type', 'start_station_id', 'end_station_id', 'year', 'month', 'day']
    df = load_csv(path, parse_dates=['started_at', 'ended_at'], dtype={c: str for c in text_cols})
    df['day_of_week'] = pd.Categorical(df['day_of_week'], categories=day_order, ordered=True)
    return df

def summary_stats(df, col):
    s = df[col].describe()[['mean','50%','max','min']].rename({'50%':'median'})
    return s

def ride_length_summary(trips):
    return summary_stats(trips, 'ride_length_seconds')

def summary_by_rider(trips):
    return (trips.groupby('rider_category', observed=True)['ride_length_seconds']
                 .agg(['mean', 'median', 'max', 'min']))

def category_counts(trips, categories=RIDER_CATEGORIES):
    return trips['rider_category'].value_counts().reindex(categories, fill_value=0)

def weekday_summary(trips):
    """Number of rides and average ride length per rider category and weekday (Sunday first)."""
    return (trips.groupby(['rider_category', 'day_of_week'], observed=False)
                 .agg(number_of_rides=('identifier', 'size'),
                      average_duration=('ride_length_seconds', safe_mean))
                 .reset_index()
                 .sort_values(['rider_category', 'day_of_week'])
                 .reset_index(drop=True))

def save_bar_charts(weekday, out_dir):
    paths = []
    charts = [
        ('number_of_rides', 'Number of rides by rider type and weekday', 'rides', 'rides_by_weekday.png'),
        ('average_duration', 'Average ride length by rider type and weekday', 'seconds', 'avg_duration_by_weekday.png'),
    ]
    for col, title, ylabel, filename in charts:
        plt.figure(figsize=(10,4))
        sns.barplot(data=weekday, x='day_of_week', y=col, hue='rider_category', errorbar=None)
        plt.title(title)
        plt.xlabel('')
        plt.ylabel(ylabel)
        path = os.path.join(out_dir, filename)
        plt.savefig(path, bbox_inches='tight')
        plt.close()
        paths.append(path)
    return paths

def write_summary(metrics, path):
    with open(path,'w') as f:
        for k,v in metrics.items():
            f.write(f"Metric: {k}\n")
            for stat,val in v.items():
                f.write(f"  {stat}: {val}\n")
            f.write("\n")

def main():
    args = parse_args()
    Path(args.out).mkdir(parents=True, exist_ok=True)
    trips = load_trips(args.data)
    print(f"Loaded {len(trips):,} trips from {args.data}")

    metrics = {}
    metrics['ride_length_seconds'] = ride_length_summary(trips).to_dict()
    by_rider = summary_by_rider(trips)
    for category, row in by_rider.iterrows():
        metrics[f'ride_length_seconds[{category}]'] = row.to_dict()
    metrics['rides_per_category'] = category_counts(trips).to_dict()
    metrics['mean_ride_minutes'] = dict(zip(by_rider.index, seconds_to_minutes(by_rider['mean'])))
    summary_path = os.path.join(args.out,'summary_metrics.txt')
    write_summary(metrics, summary_path)
    print("Saved metrics to", summary_path)

    weekday = weekday_summary(trips)
    weekday.to_csv(os.path.join(args.out, 'avg_ride_length.csv'), index=False)
    print(weekday.to_string(index=False))

    save_bar_charts(weekday, args.out)
    print("Saved plots to", args.out)

if __name__ == '__main__':
    main()
