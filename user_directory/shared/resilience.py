# user_directory/shared/resilience.py
import logging
from typing import Callable, Tuple, Type, TypeVar

import structlog
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.get_logger()
_std_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReadRetryPolicy:
    """
    Retries idempotent storage reads on transient unavailability.

    ``retry_on`` names the exception types that mean "try again"; the composition
    root passes the storage port's unavailability error. With none given,
    nothing is retried.

    Writes must never go through this policy: a retried insert or update can
    apply twice when the first attempt actually reached the store.
    """

    def __init__(
        self,
        attempts: int = 3,
        max_wait: float = 2.0,
        retry_on: Tuple[Type[BaseException], ...] = (),
    ):
        self.attempts = max(1, attempts)
        self.max_wait = max_wait
        self.retry_on = tuple(retry_on)

    def call(self, func: Callable[..., T], *args, **kwargs) -> T:
        retrying = Retrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential(multiplier=0.1, max=self.max_wait),
            retry=retry_if_exception_type(self.retry_on),
            before_sleep=before_sleep_log(_std_logger, logging.WARNING),
            reraise=True,
        )
        return retrying(func, *args, **kwargs)


class NoRetry(ReadRetryPolicy):
    """Single attempt; used where retries would only slow tests down."""

    def __init__(self):
        super().__init__(attempts=1)
