"""
Publish written reports to S3.

Every CSV under {output_root}/{run_date}/ is uploaded with the object key
{run_date}/{filename}, or latest/{filename} when publishing the latest alias.
"""

import logging
import os
from typing import List, Mapping, Optional, Tuple

import boto3
from botocore.exceptions import ClientError

from .config import PipelineConfig
from .save_reports import is_latest

log = logging.getLogger("publish")

LATEST_PREFIX = 'latest'


def resolve_s3_credentials(
    config: PipelineConfig,
    environ: Mapping[str, str] = os.environ,
    override: bool = False,
) -> Tuple[str, str, str]:
    """
    Credentials to use for the upload as (access key, secret key, region).

    Credentials already present in the environment are used as-is unless
    `override` is set, in which case the configured values win.
    """
    if environ.get('AWS_ACCESS_KEY_ID') and not override:
        return (
            environ['AWS_ACCESS_KEY_ID'],
            environ.get('AWS_SECRET_ACCESS_KEY', ''),
            environ.get('AWS_DEFAULT_REGION', config.aws_region),
        )
    return config.aws_access_key_id, config.aws_secret_access_key, config.aws_region


def get_s3_client(config: PipelineConfig, override: bool = False):
    access_key, secret_key, region = resolve_s3_credentials(config, override=override)
    return boto3.client(
        's3',
        region_name=region,
        aws_access_key_id=access_key or None,
        aws_secret_access_key=secret_key or None,
    )


def upload_to_s3(
    output_root: str,
    run_date: str,
    config: PipelineConfig,
    latest: bool = False,
    client=None,
    override: bool = False,
) -> List[str]:
    """
    Upload the run date's CSV reports to the configured bucket.

    Returns the object keys written.
    """
    if client is None:
        client = get_s3_client(config, override=override)

    output_dir = os.path.join(output_root, run_date)
    files = sorted(name for name in os.listdir(output_dir) if name.endswith('.csv'))

    key_prefix = LATEST_PREFIX if latest else run_date
    if latest:
        log.info(f"Uploading {len(files)} files to s3 {config.s3_bucket} latest")
    else:
        log.info(f"Uploading {len(files)} files to s3 {config.s3_bucket} for rundate {run_date}")

    keys = []
    for name in files:
        key = f'{key_prefix}/{name}'
        try:
            client.upload_file(os.path.join(output_dir, name), config.s3_bucket, key)
        except ClientError as e:
            log.error(f"Upload of {name} to s3://{config.s3_bucket}/{key} failed: {e}")
            raise
        keys.append(key)

    return keys


def publish_reports(
    output_root: str,
    run_date: str,
    config: PipelineConfig,
    latest: Optional[bool] = None,
    client=None,
    override: bool = False,
) -> List[str]:
    """
    Upload a run date's reports, plus the latest alias when it is the newest run.

    `latest` defaults to checking the output root for newer run dates.
    """
    if client is None:
        client = get_s3_client(config, override=override)
    if latest is None:
        latest = is_latest(output_root, run_date)

    keys = upload_to_s3(output_root, run_date, config, client=client)
    if latest:
        keys += upload_to_s3(output_root, run_date, config, latest=True, client=client)
    return keys
