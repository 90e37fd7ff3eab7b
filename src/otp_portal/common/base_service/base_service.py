# File: common/base_service/base_service.py
from abc import ABC
from typing import Any, Awaitable, Callable, Dict, TypeVar

import sentry_sdk

from otp_portal.common.logging.logger import log_error
from otp_portal.common.results.result import DependencyFailedReason, Result, dependency_failed, success

T = TypeVar("T")

GENERIC_DEPENDENCY_MESSAGE = "The request could not be processed."


class BaseService(ABC):
    async def guard(self, operation: Callable[[], Awaitable[T]], context: Dict[str, Any]) -> Result[T]:
        """
        Await a store or sender call. Any exception it raises is logged, reported
        to Sentry and turned into DependencyFailed(TIMEOUT) with a message that
        does not reveal the underlying cause. Cancellation is not intercepted.
        """
        try:
            return success(await operation())
        except Exception as e:
            log_error(
                f"{context.get('action', 'Operation')} failed on a dependency",
                extra={**context, "error": str(e)},
                exc_info=True
            )
            sentry_sdk.capture_exception(e)
            return dependency_failed(DependencyFailedReason.TIMEOUT, GENERIC_DEPENDENCY_MESSAGE)
