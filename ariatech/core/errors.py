"""
Error Types
===========

Failures the store distinguishes. ``ValidationError``, ``UploadRejected`` and
``NotFound`` are raised at the request boundary and turned into 400/404
responses by the handlers registered in ``ariatech.register_error_handlers``.
``StorageFailure`` is never raised past the catalog repository: the Supabase
client hands it back inside a ``StoreResult``.
"""


class AriaTechError(Exception):
    """Base class for store errors"""
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(AriaTechError):
    """Required settings (e.g. Supabase credentials) are missing"""


class ValidationError(AriaTechError):
    """A required form field is missing or malformed"""
    status_code = 400


class UploadRejected(AriaTechError):
    """Uploaded file has the wrong type or is too large"""
    status_code = 400


class NotFound(AriaTechError):
    """No row exists for the requested id"""
    status_code = 404


class StorageFailure(AriaTechError):
    """A Supabase call failed or answered with an error payload"""
    status_code = 502

    def __init__(self, message, details=None, status=None):
        super().__init__(message, details)
        self.status = status

    def __repr__(self):
        return f"StorageFailure({self.message!r}, status={self.status!r})"
