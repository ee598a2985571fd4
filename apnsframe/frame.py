"""
Binary frame encoding for the APNs legacy provider protocol.

A notification is sent as::

    |COMMAND:1|FRAME-LEN:4|{token}|{payload}|{id:4}|{expiration:4}|{priority:1}

where every item inside the frame is ``|ITEM-ID:1|ITEM-LEN:2|value|`` and all
integers are in network byte order.
"""
import binascii
import logging
import struct
from typing import TYPE_CHECKING

from .errors import InvalidFieldValue, PayloadTooLargeError, TokenDecodeError

if TYPE_CHECKING:
    from .notification import PushNotification

# Push commands always start with command value 2.
PUSH_COMMAND_VALUE = 2

# The serialized JSON payload cannot exceed 256 bytes.
MAX_PAYLOAD_SIZE = 256

DEVICE_TOKEN_ITEM_ID = 1
PAYLOAD_ITEM_ID = 2
NOTIFICATION_IDENTIFIER_ITEM_ID = 3
EXPIRATION_DATE_ITEM_ID = 4
PRIORITY_ITEM_ID = 5

DEVICE_TOKEN_LENGTH = 32
NOTIFICATION_IDENTIFIER_LENGTH = 4
EXPIRATION_DATE_LENGTH = 4
PRIORITY_LENGTH = 1

ITEM_HEADER_FORMAT = "!BH"
COMMAND_HEADER_FORMAT = "!BI"

logger = logging.getLogger(__name__)


def decode_token(token_hex: str) -> bytes:
    try:
        token = binascii.unhexlify(token_hex)
    except (ValueError, TypeError) as e:
        raise TokenDecodeError(f"invalid device token {token_hex!r}: {e}") from e
    if len(token) != DEVICE_TOKEN_LENGTH:
        raise TokenDecodeError(
            f"device token must decode to {DEVICE_TOKEN_LENGTH} bytes, got {len(token)}"
        )
    return token


def _check_range(name: str, value: int, lower: int, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldValue(f"{name} must be an integer, got {value!r}")
    if not lower <= value <= upper:
        raise InvalidFieldValue(
            f"{name} must be an integer in [{lower}, {upper}], got {value!r}"
        )
    return int(value)


def _pack_item(item_id: int, value: bytes) -> bytes:
    return struct.pack(ITEM_HEADER_FORMAT, item_id, len(value)) + value


def encode_frame(notification: "PushNotification") -> bytes:
    """
    Build the bytes to write to the push service for ``notification``.

    Raises :class:`TokenDecodeError`, :class:`PayloadEncodeError`,
    :class:`PayloadTooLargeError` or :class:`InvalidFieldValue`; no bytes
    are produced in that case.
    """
    token = decode_token(notification.device_token)
    payload = notification.payload_json()

    limit = notification.max_payload_size
    if len(payload) > limit:
        logger.debug(
            f"Rejecting notification {notification.identifier}: "
            f"payload is {len(payload)} bytes"
        )
        raise PayloadTooLargeError(limit, len(payload))

    identifier = _check_range(
        "identifier", notification.identifier, -(2**31), 2**31 - 1
    )
    expiry = _check_range("expiry", notification.expiry, 0, 2**32 - 1)
    priority = _check_range("priority", notification.priority, 0, 2**8 - 1)

    frame = b"".join(
        [
            _pack_item(DEVICE_TOKEN_ITEM_ID, token),
            _pack_item(PAYLOAD_ITEM_ID, payload),
            _pack_item(NOTIFICATION_IDENTIFIER_ITEM_ID, struct.pack("!i", identifier)),
            _pack_item(EXPIRATION_DATE_ITEM_ID, struct.pack("!I", expiry)),
            _pack_item(PRIORITY_ITEM_ID, struct.pack("!B", priority)),
        ]
    )

    logger.debug(
        f"Encoded notification {identifier}: "
        f"{len(payload)} byte payload, {len(frame)} byte frame"
    )
    return struct.pack(COMMAND_HEADER_FORMAT, PUSH_COMMAND_VALUE, len(frame)) + frame
