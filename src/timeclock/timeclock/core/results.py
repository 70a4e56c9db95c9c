from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .constants import STORAGE_FAILURE_MESSAGE
from .exceptions import DomainError, StorageError

T = TypeVar("T")


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Outcome of a mutating service call: ``{data, success}`` or ``{error}``."""

    data: Optional[T] = None
    success: Optional[str] = None
    error: Optional[str] = None
    code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def succeeded(cls, data: T, message: str) -> "ActionResult[T]":
        return cls(data=data, success=message)

    @classmethod
    def failure(cls, message: str, code: str) -> "ActionResult[T]":
        return cls(error=message, code=code)


def run_action(
    fn: Callable[[], T],
    *,
    success: str,
    logger: logging.Logger,
    action: str,
) -> ActionResult[T]:
    """Run a use case and convert expected failures into an ActionResult.

    Only DomainError subclasses are recovered; anything else propagates.
    """

    try:
        data = fn()
    except StorageError:
        logger.exception("%s failed: storage error", action)
        return ActionResult.failure(STORAGE_FAILURE_MESSAGE, StorageError.code)
    except DomainError as e:
        logger.warning("%s rejected: %s", action, e, extra={"code": e.code})
        return ActionResult.failure(str(e), e.code)

    logger.info("%s succeeded", action)
    return ActionResult.succeeded(data, success)
