from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ExpectationKind(str, Enum):
    NON_EMPTY = "non_empty"
    EQUALS = "equals"
    LENGTH_EQUALS = "length_equals"
    LENGTH_GREATER_THAN = "length_greater_than"


class Polarity(str, Enum):
    EXPECT_PASS = "expect_pass"
    # Assertion is written so that a well-behaved translator fails it
    EXPECT_FAIL = "expect_fail"


class ScenarioAction(str, Enum):
    TRANSLATE = "translate"
    CLEAR = "clear"


class Outcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    XFAILED = "xfailed"
    XPASSED = "xpassed"


class Expectation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ExpectationKind = Field(..., description="Predicate applied to the observed text")
    value: Optional[Union[int, str]] = Field(None, description="Expected string or length, unused for non_empty")
    value_repeat: int = Field(1, ge=1, description="Repeat a string value this many times")
    source: str = Field("output", pattern="^(output|input)$", description="Which field the predicate reads")

    @model_validator(mode="after")
    def _check_value(self):
        if self.kind == ExpectationKind.NON_EMPTY:
            return self
        if self.value is None:
            raise ValueError(f"expectation '{self.kind.value}' requires a value")
        if self.kind in (ExpectationKind.LENGTH_EQUALS, ExpectationKind.LENGTH_GREATER_THAN):
            try:
                int(self.value)
            except (TypeError, ValueError):
                raise ValueError(f"expectation '{self.kind.value}' requires an integer value")
        return self

    @property
    def expected(self) -> Union[int, str, None]:
        if self.kind == ExpectationKind.EQUALS:
            return str(self.value) * self.value_repeat
        if self.kind in (ExpectationKind.LENGTH_EQUALS, ExpectationKind.LENGTH_GREATER_THAN):
            return int(self.value)
        return None

    def describe(self) -> str:
        if self.kind == ExpectationKind.NON_EMPTY:
            return f"{self.source} is non-empty"
        if self.kind == ExpectationKind.EQUALS:
            return f"{self.source} == {self.expected!r}"
        if self.kind == ExpectationKind.LENGTH_EQUALS:
            return f"len({self.source}) == {self.expected}"
        return f"len({self.source}) > {self.expected}"


class Scenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    group: Optional[str] = None
    input: str = ""
    input_repeat: int = Field(1, ge=1)
    expectations: List[Expectation] = Field(..., min_length=1)
    polarity: Polarity = Polarity.EXPECT_PASS
    action: ScenarioAction = ScenarioAction.TRANSLATE
    clear_first: bool = True
    wait_ms: Optional[int] = Field(None, ge=0, description="Overrides the configured quiescence window")

    @property
    def name(self) -> str:
        return f"{self.id}: {self.title}"

    @property
    def text(self) -> str:
        """Effective input typed into the widget."""
        return self.input * self.input_repeat

    @property
    def expect_fail(self) -> bool:
        return self.polarity == Polarity.EXPECT_FAIL


class Verdict(BaseModel):
    scenario: str
    passed: bool
    outcome: Outcome
    reason: Optional[str] = None
    error_kind: Optional[str] = None
    observed_output: str = ""
    strategy: Optional[str] = None
    duration_s: float = 0.0

    @staticmethod
    def outcome_for(passed: bool, polarity: Polarity, errored: bool = False) -> Outcome:
        # A scenario that never reached its assertions is a real failure
        if errored:
            return Outcome.FAILED
        if polarity == Polarity.EXPECT_FAIL:
            return Outcome.XPASSED if passed else Outcome.XFAILED
        return Outcome.PASSED if passed else Outcome.FAILED

    def to_report(self) -> dict:
        return {
            "name": self.scenario,
            "verdict": "pass" if self.passed else "fail",
            "observedOutput": self.observed_output,
            "outcome": self.outcome.value,
            "errorKind": self.error_kind,
            "reason": self.reason,
            "strategy": self.strategy,
            "durationSeconds": round(self.duration_s, 3),
        }


class ScenarioGroup(BaseModel):
    name: str
    polarity: Polarity = Polarity.EXPECT_PASS
    scenarios: List[dict] = Field(default_factory=list)


class ScenarioCatalog(BaseModel):
    target_url: Optional[str] = None
    groups: List[ScenarioGroup]

    def scenarios(self) -> List[Scenario]:
        result = []
        for group in self.groups:
            for raw in group.scenarios:
                data = {"group": group.name, "polarity": group.polarity, **raw}
                result.append(Scenario(**data))
        return result
