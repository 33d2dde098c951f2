# cyclistic/utils.py
import pandas as pd
import numpy as np

def load_csv(path, parse_dates=None, dtype=None):
    return pd.read_csv(path, parse_dates=parse_dates, dtype=dtype, low_memory=False)

def safe_mean(x):
    return np.nan if len(x)==0 else np.mean(x)

def seconds_to_minutes(x):
    return np.round(np.asarray(x, dtype=float) / 60, 2)
