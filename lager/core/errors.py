"""Error taxonomy shared by the storage layer, the API and the scanner workflow.

Every error carries a message key (translated lazily) and the HTTP status
the API answers with.
"""

from lager.core.messages import t


class LagerError(Exception):
    """Base class for all expected application errors."""

    status_code: int = 500
    message_key: str = "internalError"

    def __init__(self, message: str | None = None, *, key: str | None = None) -> None:
        if key is not None:
            self.message_key = key
        self.message = message or t(self.message_key)
        super().__init__(self.message)


class ValidationError(LagerError):
    """Malformed or missing required field. User-correctable."""

    status_code = 400
    message_key = "invalidRequest"


class DraftValidationError(ValidationError):
    """A product draft failed validation before submission."""

    def __init__(self, field: str, message: str | None = None, *, key: str | None = None) -> None:
        self.field = field
        super().__init__(message, key=key)


class ConflictError(LagerError):
    """Uniqueness violation. User-correctable."""

    status_code = 409
    message_key = "barcodeExists"


class DuplicateBarcodeError(ConflictError):
    """Another product already uses this barcode."""

    def __init__(self, barcode: str, message: str | None = None) -> None:
        self.barcode = barcode
        super().__init__(message, key="barcodeExists")


class DuplicateSlugError(ConflictError):
    """Another category already uses this slug."""

    def __init__(self, slug: str, message: str | None = None) -> None:
        self.slug = slug
        super().__init__(message, key="slugExists")


class NotFoundError(LagerError):
    """Unknown id, barcode or slug."""

    status_code = 404
    message_key = "productNotFound"


class ResourceError(LagerError):
    """Camera or decoder unavailable. Only the user can fix this."""

    status_code = 503
    message_key = "cameraAccessFailed"


class CameraUnavailableError(ResourceError):
    """No camera could be opened on this host."""

    message_key = "cameraUnavailable"


class DecodeUnsupportedError(ResourceError):
    """The host has no barcode decoding capability."""

    message_key = "decodeUnsupported"


class TransientError(LagerError):
    """Temporary upstream failure. Degraded silently by its callers."""

    status_code = 503
    message_key = "noProductInfoFound"


class LookupUnavailableError(TransientError):
    """The external product catalog could not be reached or answered garbage."""


class InternalError(LagerError):
    """Unexpected persistence or server failure."""

    status_code = 500
    message_key = "internalError"
