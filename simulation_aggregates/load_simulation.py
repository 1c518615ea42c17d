"""
Load raw simulation output for every configured scenario.

Input layout:
    {input_root}/{run_date}/{scenario.inpath}/{prefix}...{run number}....parquet

Each scenario directory holds one file per simulation run. Files are kept
when their name starts with the metric-family prefix and carries exactly one
run number; every record is filtered to the target region and tagged with
its run number and scenario label before the scenarios are stacked.
"""

import logging
import os
import re
from typing import Callable, Iterable, List, Optional

import numpy as np
import pandas as pd

from .config import (
    CA_FIPS_REGEX,
    IFR_PREFIX,
    REGION_COL,
    RUN_COL,
    SCENARIO_COL,
    SOURCE_COLUMN_MAP,
)
from .scenarios import SCENARIOS, Scenario

log = logging.getLogger("simulation_loader")

# Run numbers are not zero-padded tokens: "000000012" yields 12
RUN_NUMBER_PATTERN = re.compile(r'[1-9][0-9]*')

PROGRESS_EVERY = 25

Reader = Callable[[str, str], pd.DataFrame]


# =============================================================================
# REGION FILTER
# =============================================================================

def filter_to_region(df: pd.DataFrame, pattern: str = CA_FIPS_REGEX) -> pd.DataFrame:
    """
    Keep only records whose region identifier matches `pattern`.

    Some scenarios are simulated over several states, so this runs on every
    file before anything else sees it. Region ids come back as plain text,
    so a categorical column read from parquet keeps no filtered-out codes.
    """
    region = df[REGION_COL].astype(str)
    mask = region.str.contains(pattern, regex=True)
    return df.loc[mask].assign(**{REGION_COL: region[mask]}).reset_index(drop=True)


# =============================================================================
# RUN LOADER
# =============================================================================

def extract_run_number(filename: str) -> Optional[int]:
    """Run number embedded in `filename`, or None unless there is exactly one."""
    tokens = RUN_NUMBER_PATTERN.findall(filename)
    if len(tokens) != 1:
        return None
    return int(tokens[0])


def find_run_files(input_dir: str, prefix: str = IFR_PREFIX) -> List[str]:
    """File names in `input_dir` matching `^prefix` (a regex) that name a single run."""
    return sorted(
        name for name in os.listdir(input_dir)
        if re.match(prefix, name) and extract_run_number(name) is not None
    )


def read_simulation_file(file_path: str, pattern: str = CA_FIPS_REGEX) -> pd.DataFrame:
    """Read one simulation run file and filter it to the target region."""
    if file_path.endswith('.csv'):
        df = pd.read_csv(file_path, dtype={REGION_COL: str})
    else:
        df = pd.read_parquet(file_path)
    return filter_to_region(df, pattern)


def load_scenario_runs(
    input_dir: str,
    scenario: str,
    prefix: str = IFR_PREFIX,
    pattern: str = CA_FIPS_REGEX,
    reader: Reader = read_simulation_file,
) -> Optional[pd.DataFrame]:
    """
    Load every run file of one scenario.

    Returns a single frame tagged with `run_id` and `scenario`, or None when
    there is no data for the scenario (missing directory or no run files).
    """
    if not os.path.isdir(input_dir):
        log.info(f"Skipping {scenario} because input directory {input_dir} does not exist")
        return None

    files = find_run_files(input_dir, prefix)
    log.info(f"Scenario {scenario} IFR_PREFIX {prefix} found {len(files)} simulation files")
    if not files:
        return None

    frames = []
    for idx, name in enumerate(files, start=1):
        run_id = extract_run_number(name)
        df = reader(os.path.join(input_dir, name), pattern)
        frames.append(df.assign(**{RUN_COL: np.int64(run_id), SCENARIO_COL: scenario}))
        if idx % PROGRESS_EVERY == 0:
            log.info(f"Processing file {idx} / {len(files)} ( id = {run_id} )")

    return pd.concat(frames, ignore_index=True)


# =============================================================================
# SIMULATION LOADER
# =============================================================================

def rename_to_output_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename raw simulation metric columns to the canonical output names."""
    return df.rename(columns=SOURCE_COLUMN_MAP)


def read_simulation(
    input_root: str,
    run_date: str,
    scenarios: Iterable[Scenario] = SCENARIOS,
    prefix: str = IFR_PREFIX,
    region_pattern: str = CA_FIPS_REGEX,
    reader: Reader = read_simulation_file,
) -> pd.DataFrame:
    """
    Read all simulation runs for all scenarios of one run date.

    Scenarios are visited in catalog order; the ones without data are
    skipped. Raises FileNotFoundError when nothing at all was loaded.
    """
    run_dir = os.path.join(input_root, run_date)
    log.info(f"Reading simulation output from {input_root} for date {run_date}")

    frames = []
    for scenario in scenarios:
        scenario_df = load_scenario_runs(
            os.path.join(run_dir, scenario.inpath),
            scenario.label,
            prefix=prefix,
            pattern=region_pattern,
            reader=reader,
        )
        if scenario_df is not None:
            frames.append(scenario_df)

    if not frames or sum(len(df) for df in frames) == 0:
        raise FileNotFoundError(f"No simulation files found at {run_dir}")

    out = pd.concat(frames, ignore_index=True)
    log.info(f"Loaded {len(out)} records from {len(frames)} scenario directories")
    return rename_to_output_columns(out)
