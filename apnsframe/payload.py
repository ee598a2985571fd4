from typing import Any


# Use the alert dictionary only when localization is needed; a plain string
# alert is enough otherwise.
class AlertDictionary:
    def __init__(
        self,
        body: str | None = None,
        action_loc_key: str | None = None,
        loc_key: str | None = None,
        loc_args: list[str] | None = None,
        launch_image: str | None = None,
    ) -> None:
        self.body = body
        self.action_loc_key = action_loc_key
        self.loc_key = loc_key
        self.loc_args = loc_args
        self.launch_image = launch_image

    def dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}

        if self.body:
            result["body"] = self.body
        if self.action_loc_key:
            result["action-loc-key"] = self.action_loc_key
        if self.loc_key:
            result["loc-key"] = self.loc_key
        if self.loc_args:
            result["loc-args"] = list(self.loc_args)
        if self.launch_image:
            result["launch-image"] = self.launch_image

        return result


class Payload:
    """
    The content stored under the "aps" key of a push notification.

    ``alert`` is either plain text or an :class:`AlertDictionary`. Empty
    fields are left out of :meth:`dict`, so a badge of 0 is omitted too;
    ``PushNotification.add_payload`` rewrites it to -1 so that the badge
    still gets cleared.
    """

    def __init__(
        self,
        alert: AlertDictionary | str | None = None,
        badge: int | None = None,
        sound: str | None = None,
    ) -> None:
        self.alert = alert
        self.badge = badge
        self.sound = sound

    def dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}

        if isinstance(self.alert, AlertDictionary):
            result["alert"] = self.alert.dict()
        elif self.alert is not None:
            result["alert"] = self.alert
        if self.badge:
            result["badge"] = self.badge
        if self.sound:
            result["sound"] = self.sound

        return result
