"""
Tests of simulation_aggregates.publish
"""

import os

import pytest
from botocore.exceptions import ClientError

from conftest import RUN_DATE
from simulation_aggregates.config import PipelineConfig
from simulation_aggregates.publish import (
    publish_reports,
    resolve_s3_credentials,
    upload_to_s3,
)


class FakeS3Client:
    def __init__(self, fail_on=None):
        self.uploads = []
        self.fail_on = fail_on

    def upload_file(self, filename, bucket, key):
        if self.fail_on and key.endswith(self.fail_on):
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
                "PutObject",
            )
        self.uploads.append((filename, bucket, key))


@pytest.fixture
def config(tmp_path):
    return PipelineConfig(
        input_root=str(tmp_path / "model_output"),
        output_root=str(tmp_path / "aggregates"),
        run_date=RUN_DATE,
        s3_bucket="test-bucket",
        aws_access_key_id="config-key",
        aws_secret_access_key="config-secret",
        aws_region="us-west-1",
    )


@pytest.fixture
def written_reports(output_root):
    run_dir = os.path.join(output_root, RUN_DATE)
    for name in ("No_Intervention.csv", "No_Intervention.county.csv", "notes.txt"):
        with open(os.path.join(run_dir, name), "w", encoding="utf-8") as fh:
            fh.write("time\n2020-04-01\n")
    return output_root


def test_upload_by_run_date(written_reports, config):
    client = FakeS3Client()

    keys = upload_to_s3(written_reports, RUN_DATE, config, client=client)

    assert keys == [
        f"{RUN_DATE}/No_Intervention.county.csv",
        f"{RUN_DATE}/No_Intervention.csv",
    ]
    assert client.uploads[0] == (
        os.path.join(written_reports, RUN_DATE, "No_Intervention.county.csv"),
        "test-bucket",
        f"{RUN_DATE}/No_Intervention.county.csv",
    )


def test_upload_latest(written_reports, config):
    client = FakeS3Client()

    keys = upload_to_s3(written_reports, RUN_DATE, config, latest=True, client=client)

    assert keys == ["latest/No_Intervention.county.csv", "latest/No_Intervention.csv"]


def test_upload_failure_propagates(written_reports, config, caplog):
    client = FakeS3Client(fail_on="No_Intervention.csv")

    with pytest.raises(ClientError):
        upload_to_s3(written_reports, RUN_DATE, config, client=client)

    assert "failed" in caplog.text


def test_publish_reports_latest_run(written_reports, config):
    client = FakeS3Client()

    keys = publish_reports(written_reports, RUN_DATE, config, client=client)

    assert [k.split("/")[0] for k in keys] == [RUN_DATE, RUN_DATE, "latest", "latest"]


def test_publish_reports_older_run(written_reports, config):
    os.mkdir(os.path.join(written_reports, "20991231"))
    client = FakeS3Client()

    keys = publish_reports(written_reports, RUN_DATE, config, client=client)

    assert all(k.startswith(f"{RUN_DATE}/") for k in keys)


def test_credentials_from_environment(config):
    environ = {
        "AWS_ACCESS_KEY_ID": "env-key",
        "AWS_SECRET_ACCESS_KEY": "env-secret",
        "AWS_DEFAULT_REGION": "eu-west-2",
    }

    assert resolve_s3_credentials(config, environ=environ) == (
        "env-key",
        "env-secret",
        "eu-west-2",
    )


def test_credentials_override(config):
    environ = {"AWS_ACCESS_KEY_ID": "env-key", "AWS_SECRET_ACCESS_KEY": "env-secret"}

    assert resolve_s3_credentials(config, environ=environ, override=True) == (
        "config-key",
        "config-secret",
        "us-west-1",
    )


def test_credentials_fall_back_to_config(config):
    environ = {}

    assert resolve_s3_credentials(config, environ=environ) == (
        "config-key",
        "config-secret",
        "us-west-1",
    )
    assert environ == {}
