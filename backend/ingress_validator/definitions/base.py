"""One validator shape shared by every resource kind."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from ingress_validator.errors import ValidationErrors

T = TypeVar("T")


class Validator(ABC, Generic[T]):
    """Abstract base for resource validators.

    Contract:
        - validate() is deterministic: same input → same output
        - validate() returns None when the item is valid, otherwise a
          ValidationErrors holding every problem found
        - validate() never mutates the item or the validator's configuration
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def validate(self, item: T) -> Optional[ValidationErrors]:
        ...
