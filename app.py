#!/usr/bin/env python3
import aws_cdk as cdk

from strongbox.strongbox_stack import StrongboxStack
from strongbox.monitoring_stack import MonitoringStack

app = cdk.App()

strongbox = StrongboxStack(app, "StrongboxStack")
MonitoringStack(app, "StrongboxMonitoringStack",
    presign_function_name=strongbox.presignFunction.function_name,
    upload_bucket_name=strongbox.uploadBucket.bucket_name,
    account_table_name=strongbox.accountTable.table_name)

app.synth()
