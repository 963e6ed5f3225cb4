import logging

from botocore.exceptions import BotoCoreError, ClientError

from .errors import SigningFailure

logger = logging.getLogger(__name__)


class URLSigner:
    """Presigns PUT requests for an authorized object key."""

    def __init__(self, s3, bucket, expires_in):
        self.s3 = s3
        self.bucket = bucket
        self.expires_in = expires_in

    def sign(self, context):
        key = context.object_key
        try:
            url = self.s3.generate_presigned_url(
                ClientMethod="put_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Presigning s3://%s/%s failed: %s", self.bucket, key, e)
            raise SigningFailure()

        if not url:
            raise SigningFailure()
        logger.info("Signed upload for s3://%s/%s, valid %ds", self.bucket, key, self.expires_in)
        return url
