import threading
from dataclasses import dataclass
from typing import List

from order_relay.adapters.interfaces.token_store import TokenStore
from order_relay.core.exceptions import InvalidInputError, PersistenceError
from order_relay.core.logging import get_logger
from order_relay.domain.models.device import DeviceToken

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegistrationResult:
    inserted: bool


class DeviceTokenRegistry:
    """
    In-memory set of known devices, written through to a ``TokenStore``.

    The duplicate check, the insert and the full rewrite of the store run
    under one lock so concurrent registrations cannot both pass the check
    or overwrite each other's write. A failed write is logged and the
    in-memory insert is kept.
    """

    def __init__(self, store: TokenStore):
        self.store = store
        self._tokens: List[DeviceToken] = []
        self._lock = threading.Lock()
        self.load()

    def load(self) -> None:
        """Replace the in-memory set with the persisted one; never raises."""
        try:
            tokens = self.store.load()
        except PersistenceError as e:
            logger.warning(f"Failed to load device tokens, starting empty: {e.detail}")
            tokens = []

        with self._lock:
            self._tokens = list(tokens)
        logger.info(f"Loaded {len(tokens)} device tokens")

    def register(self, token: DeviceToken) -> RegistrationResult:
        """
        Add ``token`` unless a known device shares its Expo or FCM address.

        Raises:
            InvalidInputError: If the token carries neither address.
        """
        if token.is_empty():
            raise InvalidInputError("No token received", field="expoPushToken")

        with self._lock:
            if any(known.matches(token) for known in self._tokens):
                logger.debug("Device already registered; ignoring")
                return RegistrationResult(inserted=False)

            self._tokens.append(token)
            snapshot = list(self._tokens)

            try:
                self.store.save(snapshot)
            except PersistenceError as e:
                logger.error(f"Device token registered but not persisted: {e.detail}")

        logger.info(f"Registered new device ({len(snapshot)} total)")
        return RegistrationResult(inserted=True)

    def list_all(self) -> List[DeviceToken]:
        with self._lock:
            return list(self._tokens)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
