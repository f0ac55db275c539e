from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text.strip() or None


@dataclass(frozen=True)
class DeviceToken:
    """A push-capable endpoint. At least one address is populated."""

    expo_push_token: Optional[str] = None
    fcm_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeviceToken":
        return cls(
            expo_push_token=_clean(data.get("expoPushToken")),
            fcm_token=_clean(data.get("fcmToken")),
        )

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"expoPushToken": self.expo_push_token, "fcmToken": self.fcm_token}

    def is_empty(self) -> bool:
        return not self.expo_push_token and not self.fcm_token

    def matches(self, other: "DeviceToken") -> bool:
        """Same device if either populated address is shared."""
        if self.expo_push_token and self.expo_push_token == other.expo_push_token:
            return True
        if self.fcm_token and self.fcm_token == other.fcm_token:
            return True
        return False


@dataclass(frozen=True)
class NotificationEvent:
    """What to tell every device: a title, a body and optional data."""

    title: str
    body: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationMessage:
    """One provider message addressed to a single device."""

    to: str
    title: str
    body: str
    sound: Optional[str] = "default"
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {
            "to": self.to,
            "title": self.title,
            "body": self.body,
        }
        if self.sound:
            message["sound"] = self.sound
        if self.data:
            message["data"] = self.data
        return message
