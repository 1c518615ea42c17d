"""
Re-useable fixtures for tests

Builds small simulation output trees on disk in the layout the pipeline reads:
{input_root}/{run_date}/{scenario inpath}/{prefix}...{run}....parquet
"""

import os
from typing import Dict, Iterable, List

import pandas as pd
import pytest

from simulation_aggregates.config import DATA_OUTPUT_COLS, SOURCE_COLUMN_MAP

RUN_DATE = "20200512"

RAW_METRIC_COLS = list(SOURCE_COLUMN_MAP)


def raw_run_frame(rows: Iterable[Dict]) -> pd.DataFrame:
    """
    Raw simulation records; metrics not given in a row default to 0.

    Rows use the raw column names (geoid, time, hosp_curr, incidD, ...).
    """
    df = pd.DataFrame(list(rows))
    for col in RAW_METRIC_COLS:
        if col not in df.columns:
            df[col] = 0
        df[col] = df[col].fillna(0).astype("int64")
    df["geoid"] = df["geoid"].astype(str)
    df["time"] = pd.to_datetime(df["time"])
    return df[["geoid", "time", *RAW_METRIC_COLS]]


def records_frame(rows: Iterable[Dict]) -> pd.DataFrame:
    """Loaded (tagged and renamed) records; missing metrics default to 0."""
    df = pd.DataFrame(list(rows))
    for col in DATA_OUTPUT_COLS:
        if col not in df.columns:
            df[col] = 0
    return df


def write_run_file(directory, name: str, rows: Iterable[Dict]) -> str:
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, name)
    raw_run_frame(rows).to_parquet(path, index=False)
    return path


def run_file_name(run: int, prefix: str = "high_death") -> str:
    return f"{prefix}_death-{run:09d}.hosp.parquet"


@pytest.fixture(scope="session", autouse=True)
def pandas_terminal_width():
    # Wide enough to show a full summary row in assertion output
    pd.set_option("display.width", 120)
    pd.set_option("display.max_columns", 1000)


@pytest.fixture
def simulation_tree(tmp_path):
    """
    Factory writing run files for scenarios under a fresh input root.

    Call with {inpath: {run number: rows}}; returns the input root.
    """
    input_root = tmp_path / "model_output"

    def _make(scenarios: Dict[str, Dict[int, List[Dict]]], run_date: str = RUN_DATE):
        for inpath, runs in scenarios.items():
            scenario_dir = input_root / run_date / inpath
            scenario_dir.mkdir(parents=True, exist_ok=True)
            for run, rows in runs.items():
                write_run_file(scenario_dir, run_file_name(run), rows)
        return str(input_root)

    return _make


@pytest.fixture
def output_root(tmp_path):
    root = tmp_path / "aggregates"
    (root / RUN_DATE).mkdir(parents=True)
    return str(root)
