from aws_cdk import (
    Stack,
    Duration,
    CfnOutput,
    RemovalPolicy,
    aws_dynamodb as dynamodb,
    aws_s3 as s3,
    aws_lambda as _lambda,
    aws_apigateway as apigw,
)
from constructs import Construct

STRONGBOX = "Strongbox"
URL_EXPIRY_SECONDS = 300
LAMBDA_TIMEOUT_SECONDS = 30


class StrongboxStack(Stack):

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Identity table, one record per subject
        CDK_tableName = f"{STRONGBOX}-Accounts"
        self.accountTable = dynamodb.Table(self, CDK_tableName,
            partition_key=dynamodb.Attribute(name="sub", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            removal_policy=RemovalPolicy.RETAIN)

        # Upload bucket, one key prefix per account group
        CDK_uploadBucketName = f"{STRONGBOX}-UploadBucket"
        self.uploadBucket = s3.Bucket(self, CDK_uploadBucketName,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            encryption=s3.BucketEncryption.S3_MANAGED,
            enforce_ssl=True,
            versioned=False,
            removal_policy=RemovalPolicy.RETAIN,
            cors=[s3.CorsRule(
                allowed_methods=[s3.HttpMethods.PUT],
                allowed_origins=["*"],
                allowed_headers=["*"])],
            lifecycle_rules=[s3.LifecycleRule(
                enabled=True,
                abort_incomplete_multipart_upload_after=Duration.days(7))])

        # Create Lambda
        CDK_lambdaName = f"{STRONGBOX}-Lambda-PresignURL"
        self.presignFunction = _lambda.Function(self, CDK_lambdaName,
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="upload_auth.presign_url.main",
            code=_lambda.Code.from_asset("lambda"),
            timeout=Duration.seconds(LAMBDA_TIMEOUT_SECONDS),
            environment={
                "DYNAMO_TABLE": self.accountTable.table_name,
                "BUCKET_NAME": self.uploadBucket.bucket_name,
                "URL_EXPIRATION": str(URL_EXPIRY_SECONDS),
                "PLATFORM": "lambda",
            })

        # Account reads, usage listing and presigned PUTs
        self.accountTable.grant_read_data(self.presignFunction)
        self.uploadBucket.grant_read(self.presignFunction)
        self.uploadBucket.grant_put(self.presignFunction)

        # REST API
        CDK_APIPresignURLName = f"{STRONGBOX}-RestApiGW"
        self.api = apigw.RestApi(self, CDK_APIPresignURLName,
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_methods=["POST", "OPTIONS"]))

        LambdaPresignURLIntegration = apigw.LambdaIntegration(self.presignFunction, proxy=True)
        LambdaPresignURLResource = self.api.root.add_resource("upload-url")
        LambdaPresignURLResource.add_method("POST", LambdaPresignURLIntegration)

        CfnOutput(self, "AccountTableName", value=self.accountTable.table_name)
        CfnOutput(self, "UploadBucketName", value=self.uploadBucket.bucket_name)
        CfnOutput(self, "APIPresignURLEndpoint", value=self.api.url)
