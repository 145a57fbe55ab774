"""Tagged outcomes of campaign storage operations."""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Success:
    """The store accepted the request."""

    value: Any = None


@dataclass(frozen=True)
class ValidationFailed:
    """The request was rejected locally; nothing was sent to the store."""

    message: str


@dataclass(frozen=True)
class RemoteFailure:
    """The store refused the request or could not be reached."""

    operation: str
    status_code: Optional[int] = None


OperationResult = Union[Success, ValidationFailed, RemoteFailure]
