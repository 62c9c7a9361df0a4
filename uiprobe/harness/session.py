import logging
from typing import Callable, Iterable, List, Optional

from playwright.sync_api import Browser, Page, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from uiprobe.config import RunSettings
from uiprobe.harness.interaction import navigate
from uiprobe.harness.runner import ScenarioRunner, error_verdict, translate_error
from uiprobe.locator.locator import FieldLocator
from uiprobe.models.scenario import Scenario, Verdict

LOGGER = logging.getLogger(__name__)


class BrowserSession:
    """Owns the Playwright driver and one Chromium instance for a whole suite."""

    def __init__(self, settings: RunSettings = None):
        self.settings = settings or RunSettings()
        self._playwright = None
        self.browser: Optional[Browser] = None

    def __enter__(self) -> "BrowserSession":
        launch_args = []
        if self.settings.ignore_https_errors:
            launch_args.append("--ignore-certificate-errors")

        self._playwright = sync_playwright().start()
        try:
            self.browser = self._playwright.chromium.launch(headless=self.settings.headless, args=launch_args)
        except Exception:
            self._playwright.stop()
            raise
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            if self.browser is not None:
                self.browser.close()
        finally:
            self._playwright.stop()
            self.browser = None
            self._playwright = None

    def run_on_fresh_page(self, action: Callable[[Page], object]):
        """
        Opens an isolated context + page, loads the target, runs `action`,
        and always closes the context afterwards.
        """
        context_options = {}
        if self.settings.ignore_https_errors:
            context_options["ignore_https_errors"] = True

        context = self.browser.new_context(**context_options)
        try:
            page = context.new_page()
            navigate(page, self.settings.target_url, self.settings.settle_ms)
            return action(page)
        finally:
            context.close()


class SuiteRunner:
    def __init__(self, session: BrowserSession, locator: FieldLocator = None,
                 on_verdict: Callable[[Verdict], None] = None):
        self.session = session
        self.locator = locator or FieldLocator()
        self.on_verdict = on_verdict

    def run(self, scenarios: Iterable[Scenario]) -> List[Verdict]:
        verdicts = []
        for scenario in scenarios:
            LOGGER.info("Running %s", scenario.name)
            try:
                verdict = self.session.run_on_fresh_page(
                    lambda page: ScenarioRunner(page, self.locator, self.session.settings).run(scenario)
                )
            except PlaywrightError as e:
                # Page never became usable (navigation, context setup)
                verdict = error_verdict(scenario, translate_error(e))
                LOGGER.info("%s: %s", scenario.name, verdict.reason)
            verdicts.append(verdict)
            if self.on_verdict:
                self.on_verdict(verdict)
        return verdicts


def filter_scenarios(scenarios: Iterable[Scenario], pattern: Optional[str]) -> List[Scenario]:
    if not pattern:
        return list(scenarios)
    needle = pattern.lower()
    return [s for s in scenarios
            if needle in s.id.lower() or needle in (s.group or "").lower() or needle in s.title.lower()]
