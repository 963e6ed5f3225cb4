import decimal
import enum
import json
import logging
from dataclasses import dataclass

from .errors import MalformedRequest

logger = logging.getLogger(__name__)

# Largest single object S3 accepts.
S3_MAX_OBJECT_BYTES = 5 * 1024**4


class ServiceTier(enum.IntEnum):
    FREE = 0
    STANDARD = 1
    ENTERPRISE = 2

    @classmethod
    def coerce(cls, value):
        """Map a stored tier value onto a tier, falling back to FREE."""
        if isinstance(value, bool):
            return cls.FREE
        try:
            number = decimal.Decimal(value)
            if number != int(number):
                return cls.FREE
            return cls(int(number))
        except (TypeError, ValueError, ArithmeticError):
            return cls.FREE


@dataclass(frozen=True)
class UploadRequest:
    """Caller-supplied upload request. Nothing here is trusted."""

    subject_id: str
    object_key: str
    file_size: int = 0
    email: str = ""
    user_name: str = ""

    @classmethod
    def from_json(cls, body, max_file_size=S3_MAX_OBJECT_BYTES):
        try:
            payload = json.loads(body if body is not None else "")
        except RecursionError:
            raise MalformedRequest("Request body is nested too deeply")
        except ValueError as e:
            raise MalformedRequest(str(e))
        if not isinstance(payload, dict):
            raise MalformedRequest("Request body must be a JSON object")
        return cls.from_payload(payload, max_file_size=max_file_size)

    @classmethod
    def from_payload(cls, payload, max_file_size=S3_MAX_OBJECT_BYTES):
        if "company_id" in payload:
            logger.warning("Ignoring client-supplied company_id for sub %r", payload.get("sub"))

        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub.strip():
            raise MalformedRequest("Missing \"sub\" in request")
        _require_utf8("sub", sub)

        key = payload.get("file_request")
        if not isinstance(key, str) or not key.strip():
            raise MalformedRequest("Missing \"file_request\" in request")
        _require_utf8("file_request", key)
        if key.startswith("/") or ".." in key.split("/"):
            raise MalformedRequest("Invalid \"file_request\" path")

        size = payload.get("file_size", 0)
        if size is None:
            size = 0
        if isinstance(size, bool) or not isinstance(size, int):
            raise MalformedRequest("\"file_size\" must be an integer")
        if size < 0:
            raise MalformedRequest("\"file_size\" must not be negative")
        if size > max_file_size:
            raise MalformedRequest(f"\"file_size\" exceeds the maximum of {max_file_size} bytes")

        return cls(
            subject_id=sub,
            object_key=key,
            file_size=size,
            email=_text(payload.get("email")),
            user_name=_text(payload.get("user_name")),
        )


@dataclass(frozen=True)
class AccountRecord:
    subject_id: str
    account_group_id: str
    service_tier: ServiceTier
    is_paid: bool

    @classmethod
    def from_item(cls, item):
        return cls(
            subject_id=_text(item.get("sub")),
            account_group_id=_text(item.get("company_id")),
            service_tier=ServiceTier.coerce(item.get("service_tier", 0)),
            is_paid=item.get("payed") is True,
        )


@dataclass(frozen=True)
class AuthorizedContext:
    """An upload request enriched with server-resolved account state."""

    request: UploadRequest
    account_group_id: str
    service_tier: ServiceTier
    is_paid: bool
    current_usage_bytes: int = 0

    @classmethod
    def build(cls, request, record, current_usage_bytes=0):
        return cls(
            request=request,
            account_group_id=record.account_group_id,
            service_tier=record.service_tier,
            is_paid=record.is_paid,
            current_usage_bytes=current_usage_bytes,
        )

    @property
    def object_key(self):
        return f"{self.account_group_id}/{self.request.object_key}"


def _require_utf8(name, value):
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise MalformedRequest(f"\"{name}\" is not valid UTF-8 text")


def _text(value):
    return value if isinstance(value, str) else ""
