"""
Synthesis checks for the CDK stacks.

jsii needs a Node.js runtime; the module is skipped where none is installed.
"""
import os
import shutil

import pytest

if shutil.which("node") is None:
    pytest.skip("CDK synthesis requires node", allow_module_level=True)

cdk = pytest.importorskip("aws_cdk")
from aws_cdk.assertions import Match, Template  # noqa: E402

from strongbox.monitoring_stack import MonitoringStack  # noqa: E402
from strongbox.strongbox_stack import StrongboxStack  # noqa: E402

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture(scope="module")
def stacks():
    cwd = os.getcwd()
    # Lambda asset path is relative to the project root
    os.chdir(ROOT)
    try:
        app = cdk.App()
        main = StrongboxStack(app, "TestStrongbox")
        monitoring = MonitoringStack(app, "TestStrongboxMonitoring",
            presign_function_name="presign-fn",
            upload_bucket_name="upload-bucket",
            account_table_name="accounts")
        yield Template.from_stack(main), Template.from_stack(monitoring)
    finally:
        os.chdir(cwd)


def test_account_table_keyed_by_sub(stacks):
    template, _ = stacks
    template.has_resource_properties("AWS::DynamoDB::Table", {
        "KeySchema": [{"AttributeName": "sub", "KeyType": "HASH"}],
        "BillingMode": "PAY_PER_REQUEST",
    })


def test_upload_bucket_is_private(stacks):
    template, _ = stacks
    template.has_resource_properties("AWS::S3::Bucket", {
        "PublicAccessBlockConfiguration": {
            "BlockPublicAcls": True,
            "BlockPublicPolicy": True,
            "IgnorePublicAcls": True,
            "RestrictPublicBuckets": True,
        },
    })


def test_presign_function_environment(stacks):
    template, _ = stacks
    template.has_resource_properties("AWS::Lambda::Function", {
        "Handler": "upload_auth.presign_url.main",
        "Runtime": "python3.12",
        "Environment": {"Variables": Match.object_like({
            "URL_EXPIRATION": "300",
            "PLATFORM": "lambda",
        })},
    })


def test_upload_url_route(stacks):
    template, _ = stacks
    template.has_resource_properties("AWS::ApiGateway::Resource", {"PathPart": "upload-url"})
    template.has_resource_properties("AWS::ApiGateway::Method", {"HttpMethod": "POST"})


def test_monitoring_alarm_and_dashboard(stacks):
    _, template = stacks
    template.resource_count_is("AWS::CloudWatch::Dashboard", 1)
    template.resource_count_is("AWS::SNS::Topic", 1)
    template.has_resource_properties("AWS::CloudWatch::Alarm", {
        "Threshold": 0.95,
        "ComparisonOperator": "LessThanThreshold",
    })
