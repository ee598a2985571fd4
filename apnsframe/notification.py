import json
import logging
import random
import time
from enum import IntEnum
from typing import Any

from .errors import PayloadEncodeError
from .frame import MAX_PAYLOAD_SIZE, encode_frame
from .payload import AlertDictionary, Payload


class NotificationPriority(IntEnum):
    Immediate = 10
    Delayed = 5


DEFAULT_PRIORITY = NotificationPriority.Immediate

# Every notification gets a pseudo-unique identifier below this bound. The
# push service echoes it back when it rejects a notification.
IDENTIFIER_UBOUND = 9999

APS_KEY = "aps"

logger = logging.getLogger(__name__)


class PayloadJSONEncoder(json.JSONEncoder):
    def default(self, o: Any) -> Any:
        if isinstance(o, (Payload, AlertDictionary)):
            return o.dict()
        return super().default(o)


class PushNotification:
    """
    A single notification for the binary push interface.

    The top-level JSON payload is kept as a key/value map: the ``"aps"``
    entry is filled by :meth:`add_payload` and any other key can be set with
    :meth:`set`. Instances are not thread safe; use one per thread or guard
    access with a lock.
    """

    def __init__(
        self,
        device_token: str = "",
        identifier: int | None = None,
        expiry: int = 0,
        priority: int = DEFAULT_PRIORITY,
        rng: random.Random | None = None,
        json_encoder: type[json.JSONEncoder] | None = None,
        max_payload_size: int = MAX_PAYLOAD_SIZE,
    ) -> None:
        self.device_token = device_token
        self.expiry = expiry
        self.priority = priority
        self.max_payload_size = max_payload_size

        self.__payload: dict[str, Any] = {}
        self.__json_encoder = json_encoder or PayloadJSONEncoder

        if identifier is None:
            if rng is None:
                rng = random.Random(time.time_ns())
            identifier = rng.randrange(IDENTIFIER_UBOUND)
            logger.debug(f"Generated notification identifier {identifier}")
        self.identifier = identifier

    @property
    def payload(self) -> dict[str, Any]:
        return dict(self.__payload)

    def __contains__(self, key: str) -> bool:
        return key in self.__payload

    def add_payload(self, payload: Payload) -> None:
        """
        Store ``payload`` under the "aps" key.

        Note that this mutates ``payload``: a badge of 0 would be dropped
        from the JSON like any other empty field, so it is rewritten to -1,
        which the push service treats as clearing the badge.
        """
        if payload.badge == 0:
            payload.badge = -1
        self.set(APS_KEY, payload)

    def get(self, key: str) -> Any:
        return self.__payload.get(key)

    def set(self, key: str, value: Any) -> None:
        self.__payload[key] = value

    def payload_json(self) -> bytes:
        try:
            json_payload = json.dumps(
                self.__payload,
                cls=self.__json_encoder,
                ensure_ascii=False,
                separators=(",", ":"),
                allow_nan=False,
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise PayloadEncodeError(f"payload is not JSON serializable: {e}") from e
        return json_payload

    def payload_string(self) -> str:
        return self.payload_json().decode("utf-8")

    def to_bytes(self) -> bytes:
        # This is what should be written to the push service connection.
        return encode_frame(self)
