class APNsException(Exception):
    pass


class TokenDecodeError(APNsException, ValueError):
    """The device token is not valid hex or does not decode to 32 bytes."""

    pass


class BadPayloadException(APNsException):
    pass


class PayloadEncodeError(BadPayloadException):
    """The payload map holds a value that cannot be represented in JSON."""

    pass


class PayloadTooLargeError(BadPayloadException):
    def __init__(self, limit: int, size: int | None = None) -> None:
        super().__init__(f"payload is larger than the {limit} byte limit")
        self.limit = limit
        self.size = size


class InvalidFieldValue(APNsException, ValueError):
    pass
