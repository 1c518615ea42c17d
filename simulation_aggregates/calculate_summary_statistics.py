"""
Summary statistics across simulation runs.

Aggregation happens in two stages:
1. Sum the metrics within each run (across regions for the state summary,
   per region for the county summary).
2. Describe the distribution of those per-run sums with mean, median and
   the 25th / 75th percentiles.

Percentiles use linear interpolation between order statistics (pandas'
default quantile, a.k.a. type 7), which matters when there are only a
handful of runs.

Output columns are the key columns followed by, for each metric in
DATA_OUTPUT_COLS order, its _mean, _median, _q25 and _q75 columns. This is
the layout downstream consumers read.
"""

import logging
from typing import Callable, Dict, List

import pandas as pd

from .config import (
    DATA_OUTPUT_COLS,
    DATE_COL,
    OUTPUT_SUFFIXES,
    REGION_COL,
    RUN_COL,
    SCENARIO_COL,
    output_columns,
)

log = logging.getLogger("summary_statistics")

STATE_RUN_KEYS = [SCENARIO_COL, RUN_COL, DATE_COL]
STATE_KEYS = [SCENARIO_COL, DATE_COL]
REGION_RUN_KEYS = [SCENARIO_COL, RUN_COL, DATE_COL, REGION_COL]
REGION_KEYS = [SCENARIO_COL, DATE_COL, REGION_COL]

# Statistic suffix -> grouped reduction
STATISTICS: Dict[str, Callable] = {
    '_mean': lambda grouped: grouped.mean(),
    '_median': lambda grouped: grouped.median(),
    '_q25': lambda grouped: grouped.quantile(0.25, interpolation='linear'),
    '_q75': lambda grouped: grouped.quantile(0.75, interpolation='linear'),
}


def sum_within_runs(df: pd.DataFrame, keys: List[str]) -> pd.DataFrame:
    """Stage 1: sum each metric within every `keys` group."""
    summed = df.groupby(keys, sort=True, observed=True)[DATA_OUTPUT_COLS].sum()
    return summed.reset_index()


def summarize_across_runs(df: pd.DataFrame, keys: List[str]) -> pd.DataFrame:
    """
    Stage 2: mean, median and quartiles of each metric within `keys` groups.

    Every statistic of a group is computed from the same set of values, so
    q25 <= median <= q75 and the mean lies between the group min and max.
    """
    grouped = df.groupby(keys, sort=True, observed=True)[DATA_OUTPUT_COLS]
    reduced = {suffix: reduce(grouped) for suffix, reduce in STATISTICS.items()}

    stats = pd.DataFrame({
        f'{col}{suffix}': reduced[suffix][col]
        for col in DATA_OUTPUT_COLS
        for suffix in OUTPUT_SUFFIXES
    })
    stats = stats.reset_index()

    return (
        stats[output_columns(keys)]
        .sort_values(keys, kind='mergesort')
        .reset_index(drop=True)
    )


def generate_state_summary(df: pd.DataFrame) -> pd.DataFrame:
    """
    State-level statistics by scenario and date.

    Sums every run across regions, then summarizes across runs.
    """
    log.info("Summarizing state level statistics for simulation")
    per_run = sum_within_runs(df, STATE_RUN_KEYS)
    return summarize_across_runs(per_run, STATE_KEYS)


def generate_region_summary(df: pd.DataFrame) -> pd.DataFrame:
    """County-level statistics by scenario, date and region."""
    log.info("Summarizing county level statistics for simulation")
    per_run = sum_within_runs(df, REGION_RUN_KEYS)
    return summarize_across_runs(per_run, REGION_KEYS)
