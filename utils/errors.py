class BookingError(Exception):
    """Base class for errors raised by the booking core and store."""


class MalformedTimeError(BookingError, ValueError):
    def __init__(self, value):
        super().__init__(f"Malformed time {value!r}. Use HH:MM (24-hour)")
        self.value = value


class InvalidBookingRequest(BookingError, ValueError):
    pass


class RecordNotFound(BookingError):
    def __init__(self, kind: str, key):
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class SlotUnavailable(BookingError):
    pass


class StoreWriteFailure(BookingError):
    pass


class RecordInUse(BookingError):
    pass
