import re
from typing import List

from uiprobe.models.scenario import Scenario

HEADER = '''import pytest
from playwright.sync_api import Page

from uiprobe.config import RunSettings
from uiprobe.harness.interaction import navigate
from uiprobe.harness.runner import ScenarioRunner
from uiprobe.models.scenario import Scenario

TARGET_URL = {target_url!r}
SETTINGS = RunSettings(target_url=TARGET_URL)


def _run(page: Page, data: dict):
    navigate(page, TARGET_URL, SETTINGS.settle_ms)
    verdict = ScenarioRunner(page, settings=SETTINGS).run(Scenario(**data))
    if verdict.error_kind:
        pytest.fail(f"{{verdict.error_kind}}: {{verdict.reason}}")
    assert verdict.passed, f"assertion: {{verdict.reason}} (observed {{verdict.observed_output!r}})"
'''


class Compiler:
    """Turns a scenario catalogue into a standalone pytest-playwright module."""

    def compile(self, scenarios: List[Scenario], target_url: str) -> str:
        lines = [HEADER.format(target_url=target_url)]
        seen = set()

        for scenario in scenarios:
            func_name = self._function_name(scenario)
            if func_name in seen:
                raise ValueError(f"Duplicate test name generated for {scenario.id}")
            seen.add(func_name)

            lines.append("")
            lines.append(f"# {scenario.name}")
            if scenario.expect_fail:
                lines.append('@pytest.mark.xfail(reason="assertion is expected to fail by design", strict=False, raises=AssertionError)')
            lines.append(f"def {func_name}(page: Page):")
            lines.append(f"    _run(page, {scenario.model_dump(mode='json')!r})")
            lines.append("")

        return "\n".join(lines)

    def _function_name(self, scenario: Scenario) -> str:
        safe = re.sub(r"\W+", "_", scenario.id.lower()).strip("_")
        return f"test_{safe or 'scenario'}"
