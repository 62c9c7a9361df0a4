import logging
from typing import Dict, List, Optional, Sequence

from playwright.sync_api import Page

from uiprobe.errors import LocatorError
from uiprobe.locator.strategies import DEFAULT_STRATEGIES, FieldPair, LocatorStrategy

LOGGER = logging.getLogger(__name__)


class FieldLocator:
    def __init__(self, strategies: Optional[Sequence[LocatorStrategy]] = None):
        self.strategies = list(strategies) if strategies is not None else list(DEFAULT_STRATEGIES)

    def locate(self, page: Page) -> FieldPair:
        """
        Tries each strategy in priority order and returns the first match.
        Raises LocatorError when nothing on the page looks like a text field.
        """
        for strategy in self.strategies:
            pair = strategy.match(page)
            if pair is None:
                LOGGER.debug("strategy %s: no match", strategy.name)
                continue
            if pair.shared and pair.input_kind == "input":
                LOGGER.warning("strategy %s paired a single-line input with itself", strategy.name)
            LOGGER.debug("strategy %s matched (confidence %.1f)", strategy.name, pair.confidence)
            return pair
        raise LocatorError("no input field found")

    def explain(self, page: Page) -> List[Dict]:
        """Runs every strategy without short-circuiting, for diagnostics."""
        report = []
        for strategy in self.strategies:
            pair = strategy.match(page)
            report.append({
                "strategy": strategy.name,
                "matched": pair is not None,
                "confidence": pair.confidence if pair else 0.0,
                "shared": pair.shared if pair else False,
                "input_kind": pair.input_kind if pair else None,
                "output_kind": pair.output_kind if pair else None,
            })
        return report


def locate_fields(page: Page) -> FieldPair:
    return FieldLocator().locate(page)
