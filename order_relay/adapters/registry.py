import logging
from typing import Dict, Generic, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AdaptorRegistry(Generic[T]):
    """
    Registry of available adaptor implementations.
    Maps adaptor names from settings to their implementing classes.
    """

    def __init__(self, base_class: Type[T]):
        """
        Initialize an empty registry.

        Args:
            base_class: Interface every registered class must implement
        """
        self.base_class = base_class
        self._adaptors: Dict[str, Type[T]] = {}

    def register(self, adaptor_type: str, adaptor_class: Type[T]) -> None:
        """
        Register an adaptor implementation.

        Args:
            adaptor_type: Name used to select the adaptor in settings
            adaptor_class: Class to instantiate for this name

        Raises:
            ValueError: If the name is invalid, the class does not implement
                the interface, or the name is already registered
        """
        if not adaptor_type or not isinstance(adaptor_type, str):
            raise ValueError("Adaptor type must be a non-empty string")

        if not isinstance(adaptor_class, type) or not issubclass(adaptor_class, self.base_class):
            raise ValueError(
                f"Adaptor class must be a subclass of {self.base_class.__name__}"
            )

        key = adaptor_type.lower()
        if key in self._adaptors:
            raise ValueError(f"Adaptor type '{adaptor_type}' is already registered")

        self._adaptors[key] = adaptor_class
        logger.debug(f"Registered adaptor type: {key}")

    def get(self, adaptor_type: str) -> Optional[Type[T]]:
        """Retrieve an adaptor class by name, or None."""
        return self._adaptors.get((adaptor_type or "").lower())

    def list(self) -> List[str]:
        """List all registered adaptor names."""
        return list(self._adaptors.keys())

    def is_registered(self, adaptor_type: str) -> bool:
        return (adaptor_type or "").lower() in self._adaptors
