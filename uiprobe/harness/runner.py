import logging
import time
from dataclasses import dataclass
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from uiprobe.config import RunSettings
from uiprobe.errors import InteractionError, ProbeError, ProbeTimeoutError
from uiprobe.harness import expectations
from uiprobe.harness.interaction import clear_field, read_text, read_value, type_text
from uiprobe.harness.wait import blind_wait, wait_until_stable
from uiprobe.locator.locator import FieldLocator
from uiprobe.locator.strategies import FieldPair
from uiprobe.models.scenario import Scenario, ScenarioAction, Verdict

LOGGER = logging.getLogger(__name__)


def translate_error(error: Exception) -> ProbeError:
    """Maps Playwright failures onto the scenario error kinds."""
    if isinstance(error, ProbeError):
        return error
    if isinstance(error, PlaywrightTimeoutError):
        return ProbeTimeoutError(str(error))
    return InteractionError(str(error))


def error_verdict(scenario: Scenario, error: ProbeError, observed: str = "", duration_s: float = 0.0) -> Verdict:
    return Verdict(
        scenario=scenario.name,
        passed=False,
        outcome=Verdict.outcome_for(False, scenario.polarity, errored=True),
        reason=str(error),
        error_kind=error.kind,
        observed_output=observed,
        duration_s=duration_s,
    )


@dataclass
class Observation:
    output: str = ""
    input_value: str = ""
    strategy: Optional[str] = None


class ScenarioRunner:
    """
    Executes one scenario against a page that is already loaded.
    The page belongs to this scenario for the duration of the run.
    """

    def __init__(self, page: Page, locator: FieldLocator = None, settings: RunSettings = None):
        self.page = page
        self.locator = locator or FieldLocator()
        self.settings = settings or RunSettings()

    def run(self, scenario: Scenario) -> Verdict:
        started = time.monotonic()
        observation = Observation()
        error: Optional[ProbeError] = None

        try:
            self.execute(scenario, observation)
        except (ProbeError, PlaywrightError) as e:
            error = translate_error(e)

        if error is not None:
            passed = False
            reason = str(error)
            LOGGER.info("%s: %s error: %s", scenario.name, error.kind, reason)
        else:
            reason = expectations.evaluate(scenario.expectations, observation.output, observation.input_value)
            passed = reason is None

        observed = observation.input_value if scenario.action == ScenarioAction.CLEAR else observation.output
        return Verdict(
            scenario=scenario.name,
            passed=passed,
            outcome=Verdict.outcome_for(passed, scenario.polarity, errored=error is not None),
            reason=reason,
            error_kind=error.kind if error else None,
            observed_output=observed,
            strategy=observation.strategy,
            duration_s=time.monotonic() - started,
        )

    def execute(self, scenario: Scenario, observation: Observation = None) -> Observation:
        """Performs the scripted interaction; Playwright errors propagate untranslated."""
        observation = observation if observation is not None else Observation()

        # 1. Resolve fields before touching anything
        pair = self.locator.locate(self.page)
        observation.strategy = pair.strategy

        if scenario.action == ScenarioAction.CLEAR:
            self._clear_flow(pair, scenario, observation)
        else:
            self._translate_flow(pair, scenario, observation)
        return observation

    def _translate_flow(self, pair: FieldPair, scenario: Scenario, observation: Observation):
        if scenario.clear_first:
            clear_field(self.page, pair.input, self.settings.clear_settle_ms)

        type_text(pair.input, scenario.text)
        LOGGER.debug("%s: typed %d chars", scenario.id, len(scenario.text))

        wait_ms = scenario.wait_ms if scenario.wait_ms is not None else self.settings.quiescence_ms
        output = self._await_output(pair, wait_ms)
        observation.output = output.strip()

    def _clear_flow(self, pair: FieldPair, scenario: Scenario, observation: Observation):
        type_text(pair.input, scenario.text)
        self.page.wait_for_timeout(scenario.wait_ms if scenario.wait_ms is not None else self.settings.settle_ms)
        clear_field(self.page, pair.input, self.settings.clear_settle_ms)
        observation.input_value = read_value(pair.input)

    def _await_output(self, pair: FieldPair, wait_ms: int) -> str:
        if self.settings.wait_mode == "stable":
            return wait_until_stable(
                self.page,
                lambda: read_text(pair.output, pair.output_kind, pair.shared),
                interval_ms=self.settings.poll_interval_ms,
                stable_samples=self.settings.stable_samples,
                timeout_ms=max(wait_ms, self.settings.stable_timeout_ms),
            )
        blind_wait(self.page, wait_ms)
        return read_text(pair.output, pair.output_kind, pair.shared)
