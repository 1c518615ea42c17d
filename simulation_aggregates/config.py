"""
Configuration for the simulation aggregates pipeline.

Fixed column layouts live here as module constants. Everything that varies
between runs (locations, run date, credentials) is carried by an immutable
PipelineConfig passed to the pipeline entry point.
"""

import os
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, Tuple

from .scenarios import SCENARIOS, Scenario

# California county FIPS codes
CA_FIPS_REGEX = r'^06[0-9]{3}$'

# Metric-family prefix of the per-run simulation files
IFR_PREFIX = 'high_death'

# Key columns
SCENARIO_COL = 'scenario'
RUN_COL = 'run_id'
DATE_COL = 'time'
REGION_COL = 'geoid'

# Canonical metric columns, order-significant
DATA_OUTPUT_COLS = [
    'hosp_occup',
    'hosp_admit',
    'icu_occup',
    'icu_admit',
    'new_infect',
    'new_deaths',
]

# Statistic suffixes, order-significant
OUTPUT_SUFFIXES = ['_mean', '_median', '_q25', '_q75']

# Raw simulation column -> canonical output column
SOURCE_COLUMN_MAP = {
    'hosp_curr': 'hosp_occup',
    'incidH': 'hosp_admit',
    'icu_curr': 'icu_occup',
    'incidICU': 'icu_admit',
    'incidI': 'new_infect',
    'incidD': 'new_deaths',
}

# S3 publishing
S3_BUCKET = 'jhumodelaggregates'
AWS_DEFAULT_REGION = 'us-east-2'

RUN_DATE_FORMAT = '%Y%m%d'


def default_run_date() -> str:
    """Today's run date, zero-padded YYYYMMDD."""
    return date.today().strftime(RUN_DATE_FORMAT)


@dataclass(frozen=True)
class PipelineConfig:
    """Settings for one pipeline run."""

    input_root: str
    output_root: str
    run_date: str = field(default_factory=default_run_date)
    prefix: str = IFR_PREFIX
    region_pattern: str = CA_FIPS_REGEX
    scenarios: Tuple[Scenario, ...] = SCENARIOS
    do_counties: bool = True
    s3_bucket: str = S3_BUCKET
    aws_access_key_id: str = ''
    aws_secret_access_key: str = ''
    aws_region: str = AWS_DEFAULT_REGION

    @classmethod
    def from_env(cls, **overrides) -> 'PipelineConfig':
        """
        Build a config from environment variables.

        Keyword overrides win over the environment; None values are ignored
        so argparse defaults can be passed straight through.
        """
        config = cls(
            input_root=os.getenv('SIM_INPUT_DIR', '.'),
            output_root=os.getenv('SIM_OUTPUT_DIR', '.'),
            run_date=os.getenv('SIM_RUN_DATE') or default_run_date(),
            s3_bucket=os.getenv('S3_BUCKET', S3_BUCKET),
            aws_access_key_id=os.getenv('AWS_ACCESS_KEY_ID', ''),
            aws_secret_access_key=os.getenv('AWS_SECRET_ACCESS_KEY', ''),
            aws_region=os.getenv('AWS_DEFAULT_REGION', AWS_DEFAULT_REGION),
        )
        return config.with_overrides(**overrides)

    def with_overrides(self, **overrides) -> 'PipelineConfig':
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @property
    def input_dir(self) -> str:
        return os.path.join(self.input_root, self.run_date)

    @property
    def output_dir(self) -> str:
        return os.path.join(self.output_root, self.run_date)


def output_columns(key_cols: Optional[list] = None) -> list:
    """Key columns followed by every metric x statistic column, in order."""
    stat_cols = [f'{col}{suffix}' for col in DATA_OUTPUT_COLS for suffix in OUTPUT_SUFFIXES]
    return list(key_cols or []) + stat_cols
