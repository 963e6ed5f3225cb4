import base64
import binascii
import json
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from .authorizer import Authorizer
from .config import Settings
from .errors import MalformedRequest, SigningFailure, UploadAuthError
from .identity_store import IdentityStore
from .models import S3_MAX_OBJECT_BYTES, UploadRequest
from .signer import URLSigner
from .usage import UsageAccountant

logger = logging.getLogger()
logger.setLevel(logging.INFO)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "*",
}
S3_CONFIG = Config(signature_version="s3v4")


def main(event, context):
    try:
        settings = Settings.from_env()
    except UploadAuthError as e:
        logger.error("Configuration error: %s", e)
        return error_response(str(e))
    logger.setLevel(settings.log_level)

    # Fresh clients per invocation
    try:
        dynamodb = boto3.resource("dynamodb")
        s3 = boto3.client("s3", config=S3_CONFIG)
    except BotoCoreError as e:
        logger.error("Unable to create AWS clients: %s", e)
        return error_response(str(e))

    authorizer = Authorizer(
        IdentityStore(dynamodb.Table(settings.table_name)),
        UsageAccountant(s3, settings.bucket_name),
    )
    signer = URLSigner(s3, settings.bucket_name, settings.url_expiration)
    return handle(event, authorizer, signer, max_file_size=settings.max_file_size)


def handle(event, authorizer, signer, max_file_size=S3_MAX_OBJECT_BYTES):
    """Authorize one upload request and answer with a presigned URL or an error."""
    try:
        request = UploadRequest.from_json(request_body(event), max_file_size=max_file_size)
        context = authorizer.authorize(request)
        url = signer.sign(context)
    except MalformedRequest as e:
        logger.warning("Malformed request: %s", e)
        return error_response(str(e))
    except UploadAuthError as e:
        logger.warning("Upload denied (%s): %s", type(e).__name__, e)
        return error_response(str(e))

    if not url:
        return error_response(str(SigningFailure()))
    return {
        "statusCode": 200,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps({"url": url}),
    }


def request_body(event):
    body = (event or {}).get("body")
    if body is None or not event.get("isBase64Encoded"):
        return body
    try:
        return base64.b64decode(body, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise MalformedRequest(f"Invalid base64 request body: {e}")


def error_response(message):
    return {
        "statusCode": 400,
        "body": message,
    }
