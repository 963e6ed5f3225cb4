"""
Shared fakes for the upload authorization tests.

The fakes mirror only the boto3 surface the handler touches: Table.get_item,
the list_objects_v2 paginator and generate_presigned_url.
"""
import pytest
from botocore.exceptions import ClientError


def client_error(operation, code="ServiceUnavailable", message="backend down"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeTable:
    def __init__(self, items=None, error=None):
        self.items = {item["sub"]: item for item in (items or [])}
        self.error = error
        self.calls = []

    def get_item(self, Key):
        self.calls.append(Key)
        if self.error:
            raise self.error
        item = self.items.get(Key["sub"])
        return {"Item": dict(item)} if item else {}


class FakePaginator:
    def __init__(self, pages, error=None):
        self.pages = pages
        self.error = error
        self.calls = []
        self.pages_served = 0

    def paginate(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        for page in self.pages:
            self.pages_served += 1
            yield page


class FakeS3:
    def __init__(self, pages=None, url="https://bucket.s3.amazonaws.com/signed?X-Amz-Signature=abc",
                 list_error=None, sign_error=None):
        self.paginator = FakePaginator(pages if pages is not None else [{"KeyCount": 0}], error=list_error)
        self.url = url
        self.sign_error = sign_error
        self.presign_calls = []

    def get_paginator(self, name):
        assert name == "list_objects_v2"
        return self.paginator

    def generate_presigned_url(self, ClientMethod, Params, ExpiresIn):
        self.presign_calls.append({"ClientMethod": ClientMethod, "Params": Params, "ExpiresIn": ExpiresIn})
        if self.sign_error:
            raise self.sign_error
        return self.url


def objects_page(*sizes, prefix="acme/"):
    return {
        "KeyCount": len(sizes),
        "Contents": [{"Key": f"{prefix}file-{i}", "Size": size} for i, size in enumerate(sizes)],
    }


def account(sub="user-1", company_id="acme", service_tier=0, payed=True):
    item = {"sub": sub, "service_tier": service_tier, "payed": payed}
    if company_id is not None:
        item["company_id"] = company_id
    return item


@pytest.fixture
def fake_table():
    return FakeTable([account()])


@pytest.fixture
def fake_s3():
    return FakeS3()
