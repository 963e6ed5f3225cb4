import logging

from botocore.exceptions import BotoCoreError, ClientError

from .errors import BackendUnavailable

logger = logging.getLogger(__name__)


class UsageAccountant:
    """Sums the stored bytes under an account group's key prefix."""

    def __init__(self, s3, bucket):
        self.s3 = s3
        self.bucket = bucket

    def current_usage_bytes(self, account_group_id):
        prefix = f"{account_group_id}/"
        total = 0
        count = 0
        try:
            paginator = self.s3.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    total += obj["Size"]
                    count += 1
        except (ClientError, BotoCoreError) as e:
            logger.error("Listing s3://%s/%s failed: %s", self.bucket, prefix, e)
            raise BackendUnavailable(str(e))

        logger.debug("s3://%s/%s holds %d objects, %d bytes", self.bucket, prefix, count, total)
        return total
