"""Error kinds raised by the storage, repository and service layers.

Every error carries the HTTP status it maps to at the endpoint boundary.
"""


class VehicleDocsError(Exception):
    """Base class for expected failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VehicleDocsError):
    """A required field is missing or unusable."""

    status_code = 400


class NotFoundError(VehicleDocsError):
    """The vehicle document does not exist."""

    status_code = 404


class UploadTransportError(VehicleDocsError):
    """The upload could not be accepted as sent (bad multipart, oversize)."""

    status_code = 400


class UploadTooLargeError(UploadTransportError):
    """A single uploaded file exceeds the configured ceiling."""


class StorageIOError(VehicleDocsError):
    """The blob directory or file could not be prepared or written."""

    status_code = 500


class RemoteStoreError(VehicleDocsError):
    """A document store operation failed."""

    status_code = 500
