# app/common/exceptions.py
# Domain errors raised by services; routes translate them to HTTP responses.


class POSError(Exception):
    """Base class for errors raised by the service layer."""
    pass


class ValidationError(POSError):
    """Missing or malformed input, rejected before the store is touched."""
    pass


class NotFoundError(POSError):
    """Lookup by id or natural key found nothing."""
    pass


class ConflictError(POSError):
    """A unique constraint was violated (e.g. duplicate barcode)."""
    pass


class TransactionFailure(POSError):
    """A store error inside a transaction; everything was rolled back.

    The message is safe to show to clients, the cause is kept on
    ``__cause__`` and logged by the service.
    """
    pass
