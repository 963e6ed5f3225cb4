import logging

from botocore.exceptions import BotoCoreError, ClientError

from .errors import BackendUnavailable, IdentityNotFound
from .models import AccountRecord

logger = logging.getLogger(__name__)


class IdentityStore:
    """Reads account records from the DynamoDB identity table."""

    def __init__(self, table):
        self.table = table

    def lookup(self, subject_id):
        try:
            result = self.table.get_item(Key={"sub": subject_id})
        except (ClientError, BotoCoreError) as e:
            logger.error("Identity lookup failed for sub %r: %s", subject_id, e)
            raise BackendUnavailable(str(e))

        item = result.get("Item")
        if not item:
            raise IdentityNotFound()
        return AccountRecord.from_item(item)
