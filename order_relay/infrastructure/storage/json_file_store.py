import json
import os
import tempfile
from pathlib import Path
from typing import List, Sequence, Union

from order_relay.adapters.interfaces.token_store import TokenStore, tokens_from_json, tokens_to_json
from order_relay.core.exceptions import PersistenceError
from order_relay.core.logging import get_logger
from order_relay.domain.models.device import DeviceToken

logger = get_logger(__name__)


class JsonFileTokenStore(TokenStore):
    """Keeps the device registry as a pretty-printed JSON array on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[DeviceToken]:
        if not self.path.exists():
            logger.info(f"No device token file at {self.path}; starting empty")
            return []

        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
            return tokens_from_json(data, str(self.path))
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to load tokens from {self.path}: {str(e)}", original_exception=e)

    def save(self, tokens: Sequence[DeviceToken]) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(directory))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(tokens_to_json(tokens), fh, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise PersistenceError(f"Failed to write tokens to {self.path}: {str(e)}", original_exception=e)
