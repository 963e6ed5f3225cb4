import logging

from . import quota
from .errors import InvalidAccount, QuotaExceeded, Unpaid
from .models import AuthorizedContext

logger = logging.getLogger(__name__)

DENIALS = {
    quota.UNPAID: Unpaid,
    quota.QUOTA_EXCEEDED: QuotaExceeded,
}


class Authorizer:
    """Resolves the caller's account and applies the quota policy."""

    def __init__(self, identity_store, usage_accountant):
        self.identity_store = identity_store
        self.usage_accountant = usage_accountant

    def authorize(self, request):
        """Return an AuthorizedContext for ``request`` or raise UploadAuthError.

        The account group comes from the stored record only; the request type
        has no field for it.
        """
        record = self.identity_store.lookup(request.subject_id)
        if record.subject_id != request.subject_id:
            raise InvalidAccount()
        if not record.account_group_id:
            raise InvalidAccount("Account has no storage group")

        if not record.is_paid:
            logger.info("Denied sub %r: account not paid", request.subject_id)
            raise Unpaid()

        usage = self.usage_accountant.current_usage_bytes(record.account_group_id)
        decision = quota.decide(record.service_tier, usage, request.file_size, record.is_paid)
        logger.info(
            "Quota decision for sub %r: tier=%s usage=%d size=%d allowed=%s",
            request.subject_id, record.service_tier.name, usage, request.file_size, decision.allowed,
        )
        if not decision.allowed:
            raise DENIALS[decision.reason]()

        return AuthorizedContext.build(request, record, current_usage_bytes=usage)
