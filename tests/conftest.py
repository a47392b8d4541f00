import os
import sys

import pytest
import boto3
from botocore.exceptions import ClientError

ROOT = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, os.path.join(ROOT, "common", "layers", "common-utils", "python"))
sys.path.insert(0, os.path.join(ROOT, "services", "daily-cleanup", "src"))

CONFIG_VARS = (
    "BUCKET_NAME",
    "DAYS",
    "DRY_RUN",
    "FILE_TYPES",
    "PREFIXES",
    "SNS_TOPIC_ARN",
    "CONFIG_SSM_PREFIX",
    "METRICS_NAMESPACE",
)


class DummyPaginator:
    def __init__(self, client, operation):
        self.client = client
        self.operation = operation

    def paginate(self, **kwargs):
        token = None
        while True:
            params = dict(kwargs)
            if token:
                params["ContinuationToken"] = token
            page = getattr(self.client, self.operation)(**params)
            yield page
            if not page.get("IsTruncated"):
                break
            token = page["NextContinuationToken"]


class DummyS3:
    def __init__(self, page_size=1000):
        self.objects = {}
        self.page_size = page_size
        self.list_calls = []
        self.delete_calls = []
        self.fail_keys = set()

    def add_object(self, Bucket, Key, LastModified, Size=0):
        self.objects[(Bucket, Key)] = {
            "Key": Key,
            "LastModified": LastModified,
            "Size": Size,
        }

    def list_objects_v2(self, Bucket, Prefix="", ContinuationToken=None, **kwargs):
        self.list_calls.append({"Bucket": Bucket, "Prefix": Prefix, "ContinuationToken": ContinuationToken})
        keys = sorted(k for (b, k) in self.objects if b == Bucket and k.startswith(Prefix))
        start = int(ContinuationToken or 0)
        chunk = keys[start:start + self.page_size]
        resp = {"IsTruncated": start + self.page_size < len(keys), "KeyCount": len(chunk)}
        if chunk:
            resp["Contents"] = [dict(self.objects[(Bucket, k)]) for k in chunk]
        if resp["IsTruncated"]:
            resp["NextContinuationToken"] = str(start + self.page_size)
        return resp

    def get_paginator(self, operation):
        return DummyPaginator(self, operation)

    def delete_object(self, Bucket, Key):
        self.delete_calls.append((Bucket, Key))
        if Key in self.fail_keys:
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
                "DeleteObject",
            )
        self.objects.pop((Bucket, Key), None)
        return {}


class DummySNS:
    def __init__(self):
        self.published = []

    def publish(self, **kwargs):
        self.published.append(kwargs)
        return {"MessageId": "1"}


class DummyCloudWatch:
    def __init__(self):
        self.metric_calls = []

    def put_metric_data(self, **kwargs):
        self.metric_calls.append(kwargs)
        return {}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    import common_utils.get_ssm as g
    g._SSM_CACHE.clear()
    yield


@pytest.fixture
def s3_stub():
    return DummyS3()


@pytest.fixture
def sns_stub():
    return DummySNS()


@pytest.fixture
def cloudwatch_stub():
    return DummyCloudWatch()


@pytest.fixture
def aws_stubs(monkeypatch, s3_stub, sns_stub, cloudwatch_stub):
    clients = {"s3": s3_stub, "sns": sns_stub, "cloudwatch": cloudwatch_stub}
    monkeypatch.setattr(boto3, "client", lambda name, *a, **k: clients.get(name))
    return clients
