class BookingValidationError(ValueError):
    """Raised when required booking input is missing or malformed."""
    pass


class BookingNotFoundError(LookupError):
    """Raised when no booking matches the given internal id or booking id."""
    pass


class BookingConflictError(RuntimeError):
    """Raised by a booking store when a booking id is already taken."""
    pass


class ForecastProviderError(RuntimeError):
    """Raised when the forecast provider fails (unconfigured, timeouts, network errors, bad status)."""
    pass


class NoForecastDataError(LookupError):
    """Raised when the forecast provider returned no usable samples."""
    pass


class DialogueStateError(RuntimeError):
    """Raised when a manual dialogue operation is issued in a phase that does not allow it."""
    pass
