"""
Write summary statistics as one CSV per scenario.

Output layout:
    {output_root}/{run_date}/{Scenario_Label}[.{suffix}].csv

The run date directory must already exist; it is never created here.
"""

import logging
import os
import re
from typing import List, Optional

import pandas as pd

from .config import SCENARIO_COL

log = logging.getLogger("save_reports")

RUN_DATE_DIR_PATTERN = re.compile(r'^[1-9][0-9]{7}$')


def scenario_filename(scenario: str, suffix: Optional[str] = None) -> str:
    filename = scenario.replace(' ', '_')
    if suffix is not None:
        filename = f'{filename}.{suffix}'
    return f'{filename}.csv'


def save_csv_by_scenario(
    summary_df: pd.DataFrame,
    output_root: str,
    run_date: str,
    suffix: Optional[str] = None,
) -> List[str]:
    """
    Save a summary table as one CSV per scenario.

    Args:
        summary_df: Output of one of the summary generators
        output_root: Root holding one directory per run date
        run_date: Run date directory to write into (must exist)
        suffix: Optional tag inserted before the .csv extension, e.g. 'county'

    Returns the paths written, in scenario order.
    """
    msg = "Writing summary statistics to csv"
    if suffix is not None:
        msg += f" ( suffix = {suffix} )"
    log.info(msg)

    scenarios = summary_df[SCENARIO_COL].unique()
    if len(scenarios) == 0:
        raise ValueError("No scenarios found - do input files line up with scenarios?")

    output_dir = os.path.join(output_root, run_date)
    if not os.path.isdir(output_dir):
        raise FileNotFoundError(f"No directory to write to: {output_dir}")

    written = []
    for scenario in scenarios:
        write_me = summary_df.loc[summary_df[SCENARIO_COL] == scenario].drop(columns=SCENARIO_COL)
        file_path = os.path.join(output_dir, scenario_filename(scenario, suffix))
        write_me.to_csv(file_path, index=False, encoding='utf-8')
        log.info(f"Wrote {len(write_me)} rows to {file_path}")
        written.append(file_path)

    return written


def is_latest(output_root: str, run_date: str) -> bool:
    """
    Whether `run_date` is the most recent run date directory under `output_root`.

    Run dates are zero-padded YYYYMMDD, so the lexicographic maximum is the
    latest one.
    """
    run_dates = [
        name for name in os.listdir(output_root)
        if RUN_DATE_DIR_PATTERN.match(name) and os.path.isdir(os.path.join(output_root, name))
    ]
    if not run_dates:
        return False
    return max(run_dates) == run_date
