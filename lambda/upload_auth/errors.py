class UploadAuthError(Exception):
    """Base error; ``str(err)`` is the message returned to the caller."""

    message = "Invalid User Request"

    def __init__(self, message=None):
        super().__init__(message or self.message)


class MalformedRequest(UploadAuthError):
    message = "Malformed request"


class ConfigurationError(UploadAuthError):
    message = "Service is not configured"


class IdentityNotFound(UploadAuthError):
    message = "User not found"


class InvalidAccount(UploadAuthError):
    message = "User invalid"


class QuotaExceeded(UploadAuthError):
    message = "Maximum amount of stored data exceeded"


class Unpaid(UploadAuthError):
    message = "Account is not paid"


class BackendUnavailable(UploadAuthError):
    message = "Backend unavailable"


class SigningFailure(UploadAuthError):
    message = "Unable to sign URL"
