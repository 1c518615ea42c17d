"""
Simulation Aggregates

Summarizes per-scenario epidemic simulation output across simulation runs.

Pipeline stages:
- load_simulation - find, read and region-filter the run files of each scenario
- calculate_summary_statistics - per-run sums, then mean / median / quartiles across runs
- save_reports - one CSV per scenario under the run date directory
- publish - upload the CSVs to S3 by run date or as the latest alias
"""

from .calculate_summary_statistics import (
    generate_region_summary,
    generate_state_summary,
    sum_within_runs,
    summarize_across_runs,
)
from .config import PipelineConfig
from .load_simulation import filter_to_region, load_scenario_runs, read_simulation
from .main import process_simulation
from .save_reports import is_latest, save_csv_by_scenario
from .scenarios import SCENARIOS, Scenario

__all__ = [
    "PipelineConfig",
    "SCENARIOS",
    "Scenario",
    "filter_to_region",
    "generate_region_summary",
    "generate_state_summary",
    "is_latest",
    "load_scenario_runs",
    "process_simulation",
    "read_simulation",
    "save_csv_by_scenario",
    "sum_within_runs",
    "summarize_across_runs",
]
