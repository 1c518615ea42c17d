#!/usr/bin/env python3
"""
Main entry point for the simulation aggregates pipeline.

Reads the simulation runs of every scenario for a run date, writes state and
county summary statistics as one CSV per scenario, and optionally publishes
the CSVs to S3.

Usage:
    simulation-aggregates --input-dir /data/model_output --output-dir /data/aggregates
    simulation-aggregates --input-dir ... --output-dir ... --rundate 20200512 --no-counties
    simulation-aggregates --input-dir ... --output-dir ... --upload
"""

import argparse
import logging
import sys
from typing import List, Optional

from .calculate_summary_statistics import generate_region_summary, generate_state_summary
from .config import PipelineConfig
from .load_simulation import read_simulation
from .publish import publish_reports
from .save_reports import save_csv_by_scenario

log = logging.getLogger("simulation_aggregates")

REGION_SUFFIX = 'county'


def process_simulation(
    config: PipelineConfig,
    upload: bool = False,
    override_credentials: bool = False,
) -> List[str]:
    """
    Load, summarize and save one run date.

    Args:
        config: Pipeline settings
        upload: Publish the written CSVs to S3 afterwards
        override_credentials: Use the configured AWS credentials even when
            the environment already provides some

    Returns the CSV paths written.
    """
    simulation = read_simulation(
        config.input_root,
        config.run_date,
        scenarios=config.scenarios,
        prefix=config.prefix,
        region_pattern=config.region_pattern,
    )

    state_summary = generate_state_summary(simulation)
    written = save_csv_by_scenario(state_summary, config.output_root, config.run_date)

    if config.do_counties:
        region_summary = generate_region_summary(simulation)
        written += save_csv_by_scenario(
            region_summary, config.output_root, config.run_date, suffix=REGION_SUFFIX
        )

    if upload:
        publish_reports(
            config.output_root, config.run_date, config, override=override_credentials
        )

    log.info(f"Completed run date {config.run_date}: {len(written)} files written")
    return written


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Summarize simulation runs into per-scenario statistics CSVs'
    )
    parser.add_argument(
        '--input-dir', '-i',
        help='Root of the simulation output (contains one directory per run date)'
    )
    parser.add_argument(
        '--output-dir', '-o',
        help='Root of the aggregates output (run date directory must exist)'
    )
    parser.add_argument(
        '--rundate', '-d',
        help='Run date as YYYYMMDD (default: today)'
    )
    parser.add_argument(
        '--prefix',
        help='Metric-family prefix of the simulation files (default: high_death)'
    )
    parser.add_argument(
        '--no-counties',
        action='store_true',
        help='Only write state level summaries'
    )
    parser.add_argument(
        '--upload',
        action='store_true',
        help='Upload the written CSVs to S3'
    )
    parser.add_argument(
        '--override-credentials',
        action='store_true',
        help='Use configured AWS credentials even if set in the environment'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Debug logging'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )

    config = PipelineConfig.from_env(
        input_root=args.input_dir,
        output_root=args.output_dir,
        run_date=args.rundate,
        prefix=args.prefix,
        do_counties=False if args.no_counties else None,
    )

    try:
        process_simulation(
            config,
            upload=args.upload,
            override_credentials=args.override_credentials,
        )
    except (FileNotFoundError, ValueError) as e:
        log.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
