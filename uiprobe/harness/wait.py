import logging
import time
from typing import Callable

from playwright.sync_api import Page

LOGGER = logging.getLogger(__name__)


def blind_wait(page: Page, ms: int):
    page.wait_for_timeout(ms)


def wait_until_stable(page: Page, read: Callable[[], str], interval_ms: int = 250,
                      stable_samples: int = 3, timeout_ms: int = 10000,
                      clock: Callable[[], float] = time.monotonic) -> str:
    """
    Polls `read` every `interval_ms` until it returns the same non-empty text
    for `stable_samples` consecutive samples, or until `timeout_ms` elapses.
    Returns the last sample either way; the caller's expectation decides
    whether a deadline-bound value is acceptable.
    """
    deadline = clock() + timeout_ms / 1000.0
    last = read()
    streak = 1

    while True:
        if last.strip() and streak >= stable_samples:
            LOGGER.debug("output stable after %d samples", streak)
            return last
        if clock() >= deadline:
            LOGGER.debug("stability deadline reached, returning last sample")
            return last

        page.wait_for_timeout(interval_ms)
        current = read()
        if current == last:
            streak += 1
        else:
            streak = 1
            last = current
