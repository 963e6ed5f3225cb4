# strongbox/monitoring_stack.py

import aws_cdk as cdk
from aws_cdk import Duration
from aws_cdk import aws_cloudwatch as cloudwatch
from aws_cdk import aws_sns as sns
from aws_cdk import aws_cloudwatch_actions as cloudwatch_actions
from constructs import Construct


class MonitoringStack(cdk.Stack):

    def __init__(self, scope: Construct, construct_id: str, *,
                 presign_function_name: str,
                 upload_bucket_name: str,
                 account_table_name: str,
                 **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        dashboard = cloudwatch.Dashboard(
            self,
            "StrongboxDashboard",
            dashboard_name="Strongbox-UploadAuthorization",
        )

        def lambda_metric(metric_name: str,
                          statistic: str = "Sum",
                          period_minutes: int = 5) -> cloudwatch.Metric:
            return cloudwatch.Metric(
                namespace="AWS/Lambda",
                metric_name=metric_name,
                dimensions_map={"FunctionName": presign_function_name},
                statistic=statistic,
                period=Duration.minutes(period_minutes),
            )

        def s3_metric(metric_name: str,
                      storage_type: str,
                      period_hours: int = 24) -> cloudwatch.Metric:
            # S3 storage metrics are published once a day
            return cloudwatch.Metric(
                namespace="AWS/S3",
                metric_name=metric_name,
                dimensions_map={
                    "BucketName": upload_bucket_name,
                    "StorageType": storage_type,
                },
                statistic="Average",
                period=Duration.hours(period_hours),
            )

        def dynamodb_metric(metric_name: str,
                            operation: str = "GetItem") -> cloudwatch.Metric:
            return cloudwatch.Metric(
                namespace="AWS/DynamoDB",
                metric_name=metric_name,
                dimensions_map={
                    "TableName": account_table_name,
                    "Operation": operation,
                },
                statistic="Sum",
                period=Duration.minutes(5),
            )

        presign_invocations = lambda_metric("Invocations")
        presign_errors = lambda_metric("Errors")
        presign_throttles = lambda_metric("Throttles")
        presign_duration = lambda_metric("Duration", statistic="p95")

        # Denials answer 400 from a healthy invocation; only crashes count here.
        # = IF(invocations > 0, (invocations - errors) / invocations, 1)
        presign_success_ratio = cloudwatch.MathExpression(
            expression="IF(inv > 0, (inv - err) / inv, 1)",
            using_metrics={
                "inv": presign_invocations,
                "err": presign_errors,
            },
            period=Duration.minutes(5),
            label="Presign Success Ratio",
        )

        ratio_alarm = presign_success_ratio.create_alarm(
            self,
            "PresignSuccessRatioLow",
            threshold=0.95,
            evaluation_periods=3,
            comparison_operator=cloudwatch.ComparisonOperator.LESS_THAN_THRESHOLD,
        )

        self.alarm_topic = sns.Topic(
            self,
            "AlarmTopic",
            topic_name="strongbox-alarm-topic",
        )
        ratio_alarm.add_alarm_action(
            cloudwatch_actions.SnsAction(self.alarm_topic)
        )

        bucket_object_count = s3_metric("NumberOfObjects", "AllStorageTypes")
        bucket_size = s3_metric("BucketSizeBytes", "StandardStorage")

        table_throttles = dynamodb_metric("ThrottledRequests")
        table_system_errors = dynamodb_metric("SystemErrors")

        # DASHBOARD LAYOUT
        dashboard.add_widgets(
            cloudwatch.TextWidget(
                markdown=(
                    "# Strongbox Upload Authorization\n"
                    "Presign Lambda health, account table read health and "
                    "stored data in the upload bucket."
                ),
                width=24,
                height=2,
            )
        )

        # Row 1: success ratio + alarm
        dashboard.add_widgets(
            cloudwatch.GraphWidget(
                title="Presign Success Ratio (Successful / Total)",
                left=[presign_success_ratio],
                width=16,
            ),
            cloudwatch.AlarmWidget(
                title="ALARM: Presign Success Ratio < 0.95",
                alarm=ratio_alarm,
                width=8,
            ),
        )

        # Row 2: Lambda latency and throttling
        dashboard.add_widgets(
            cloudwatch.GraphWidget(
                title="Presign Lambda: Invocations & p95 Duration",
                left=[presign_invocations],
                right=[presign_duration],
                width=12,
            ),
            cloudwatch.GraphWidget(
                title="Presign Lambda: Errors & Throttles",
                left=[presign_errors, presign_throttles],
                width=12,
            ),
        )

        # Row 3: identity lookups and stored data
        dashboard.add_widgets(
            cloudwatch.GraphWidget(
                title="Account Table GetItem: Throttles & System Errors",
                left=[table_throttles, table_system_errors],
                width=12,
            ),
            cloudwatch.GraphWidget(
                title="Upload Bucket: Files & Size",
                left=[bucket_object_count],
                right=[bucket_size],
                width=12,
            ),
        )
