# cyclistic/combine_csv.py
"""
Read quarterly trip exports, map each onto the canonical schema and stack them.
"""

import argparse
from pathlib import Path
import numpy as np
import pandas as pd

from cyclistic.schema import (
    CANONICAL_COLUMNS, COLUMN_ALIASES, STRING_COLUMNS, TIMESTAMP_COLUMNS,
    SchemaMismatchError, TypeCoercionError,
)
from cyclistic.utils import load_csv


def parse_args():
    p = argparse.ArgumentParser(description="Combine quarterly trip CSVs into one canonical CSV")
    p.add_argument('--data-dir', default='data', help='folder holding the quarterly *.csv exports')
    p.add_argument('--out', default='data/combined_trips.csv', help='path to write the combined CSV')
    return p.parse_args()


def load_batches(paths):
    """
    Read each CSV into an ordered {name: DataFrame} mapping.

    Batches are named by file stem; when two files share a stem the later one
    is keyed by its full path. The same file given twice is an error.
    """
    batches = {}
    seen = set()
    for path in map(Path, paths):
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        if path.resolve() in seen:
            raise ValueError(f"Batch given more than once: {path}")
        seen.add(path.resolve())
        name = path.stem if path.stem not in batches else str(path)
        batches[name] = load_csv(path)
    return batches


def named_batches(batches):
    # accept {name: frame} or a plain sequence of frames
    if isinstance(batches, dict):
        return list(batches.items())
    return [(f'batch {i}', df) for i, df in enumerate(batches)]


def reconcile_schema(batch, name='batch', column_map=COLUMN_ALIASES, columns=CANONICAL_COLUMNS):
    """
    Rename raw headers to canonical names and keep only the canonical fields.

    Columns that exist in just one layout (coordinates, gender, birthyear,
    tripduration) are dropped here so every batch ends up column-compatible.
    """
    df = batch.rename(columns=lambda c: str(c).strip())
    rename_plan = {c: column_map.get(c, c) for c in df.columns}

    targets = pd.Series(list(rename_plan.values()), dtype=object)
    clashes = sorted(set(targets[targets.duplicated()]) & set(columns))
    if clashes:
        raise SchemaMismatchError(name, clashes, reason='fields mapped more than once')

    df = df.rename(columns=rename_plan)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise SchemaMismatchError(name, missing)
    return df[list(columns)].copy()


def _as_string(series, name='batch'):
    # float ids come from integer columns with gaps; drop the trailing '.0'
    if pd.api.types.is_float_dtype(series):
        present = series.dropna()
        infinite = ~np.isfinite(present)
        if infinite.any():
            row = infinite.idxmax()
            raise TypeCoercionError(name, series.name, row, int(infinite.sum()), present[row])
        if (present == present.round()).all():
            series = series.astype('Int64')
    return series.astype('string')


def coerce_types(batch, name='batch'):
    """Cast ids to strings and timestamps to datetime64. Any bad value fails the batch."""
    df = batch.copy()

    missing_ids = df['identifier'].isna()
    if missing_ids.any():
        row = missing_ids.idxmax()
        raise TypeCoercionError(name, 'identifier', row, int(missing_ids.sum()))

    for col in STRING_COLUMNS:
        df[col] = _as_string(df[col], name)

    for col in TIMESTAMP_COLUMNS:
        parsed = pd.to_datetime(df[col], errors='coerce', format='ISO8601')
        bad = parsed.isna()
        if bad.any():
            row = bad.idxmax()
            raise TypeCoercionError(name, col, row, int(bad.sum()), df.at[row, col])
        df[col] = parsed
    return df


def concat_batches(batches):
    """Stack batches in the order given; every batch must expose the same columns."""
    named = named_batches(batches)
    if not named:
        raise ValueError("No batches to combine.")
    columns = list(named[0][1].columns)
    for name, df in named[1:]:
        diff = sorted(set(df.columns) ^ set(columns))
        if diff:
            raise SchemaMismatchError(name, diff, reason='column set differs from first batch')
    return pd.concat([df[columns] for _, df in named], ignore_index=True)


def combine_batches(batches, column_map=COLUMN_ALIASES):
    """Reconcile, coerce and concatenate raw batches into one canonical frame."""
    prepared = []
    for name, df in named_batches(batches):
        df = reconcile_schema(df, name, column_map=column_map)
        prepared.append((name, coerce_types(df, name)))
    return concat_batches(dict(prepared))


def main():
    args = parse_args()
    out_path = Path(args.out)
    files = [p for p in sorted(Path(args.data_dir).glob('*.csv')) if p.resolve() != out_path.resolve()]
    if not files:
        raise FileNotFoundError(f"No CSV files found in {args.data_dir}")
    print("Found files:", [str(p) for p in files])

    batches = {}
    for name, df in load_batches(files).items():
        print(f"Reading: {name} ({len(df):,} rows)")
        batches[name] = df

    combined = combine_batches(batches)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    combined.to_csv(out_path, index=False)
    print(f"Saved combined CSV ({len(combined):,} rows) to {out_path}")


if __name__ == '__main__':
    main()
