import json
import os

import pytest
from pydantic import ValidationError

from uiprobe.errors import ScenarioFileError
from uiprobe.harness.expectations import check, evaluate
from uiprobe.models.scenario import Expectation, Outcome, Polarity, Scenario, ScenarioAction, Verdict
from uiprobe.providers.api import APIProvider
from uiprobe.providers.yaml_file import YamlScenarioProvider

SCENARIO_FILE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scenarios.yaml")


@pytest.fixture(scope="module")
def catalogue():
    return {s.id: s for s in YamlScenarioProvider(SCENARIO_FILE).get_scenarios()}


def test_catalogue_has_every_group(catalogue):
    ids = list(catalogue)
    assert len([i for i in ids if i.startswith("Pos_Fun_")]) == 27
    assert len([i for i in ids if i.startswith("Neg_Fun_")]) == 10
    assert [i for i in ids if i.startswith("UI_")] == ["UI_0001", "UI_0002"]


def test_group_polarity_is_inherited(catalogue):
    assert catalogue["Pos_Fun_0004"].polarity == Polarity.EXPECT_PASS
    assert catalogue["Neg_Fun_0001"].polarity == Polarity.EXPECT_FAIL
    assert catalogue["UI_0002"].polarity == Polarity.EXPECT_PASS
    assert catalogue["Neg_Fun_0003"].group == "negative"


def test_long_word_scenario_is_kept_verbatim(catalogue):
    scenario = catalogue["Neg_Fun_0006"]

    assert len(scenario.text) == 180
    assert scenario.clear_first is False
    assert scenario.wait_ms == 5000
    assert scenario.expectations[0].expected == 190
    assert scenario.expectations[1].expected == "මමගෙදරයනවා" * 10


def test_ui_scenarios(catalogue):
    assert catalogue["UI_0001"].action == ScenarioAction.CLEAR
    assert catalogue["UI_0001"].expectations[0].source == "input"
    assert catalogue["UI_0002"].text == "mama gedhara yanavaa " * 50


def test_leading_spaces_survive_loading(catalogue):
    assert catalogue["Pos_Fun_0026"].input == "       mama gedhara yanavaa"
    assert catalogue["Neg_Fun_0010"].input == ""


def test_scenario_name_and_immutability(catalogue):
    scenario = catalogue["Pos_Fun_0001"]
    assert scenario.name == "Pos_Fun_0001: Convert a short daily greeting phrase"
    with pytest.raises(ValidationError):
        scenario.input = "changed"


@pytest.mark.parametrize("kind, value, observed, ok", [
    ("non_empty", None, "  ම ", True),
    ("non_empty", None, "   ", False),
    ("equals", "මම ගෙදර යනවා", "මම ගෙදර යනවා", True),
    ("equals", "මම ගෙදර යනවා", "මම ගෙදර යනව", False),
    ("length_equals", 3, "abc", True),
    ("length_greater_than", 50, "x" * 50, False),
])
def test_expectation_check(kind, value, observed, ok):
    reason = check(Expectation(kind=kind, value=value), observed)
    assert (reason is None) == ok


def test_expectation_requires_value():
    with pytest.raises(ValidationError):
        Expectation(kind="equals")
    with pytest.raises(ValidationError):
        Expectation(kind="length_equals", value="many")
    with pytest.raises(ValidationError):
        # isdigit() accepts superscripts that int() rejects
        Expectation(kind="length_greater_than", value="\u00b2")


def test_scenario_requires_an_expectation():
    with pytest.raises(ValidationError):
        Scenario(id="X", title="none", expectations=[])


def test_evaluate_picks_source():
    expectations = [Expectation(kind="equals", value="", source="input"), Expectation(kind="non_empty")]

    assert evaluate(expectations, output="ok", input_value="") is None
    assert "input" in evaluate(expectations, output="ok", input_value="left over")


@pytest.mark.parametrize("passed, polarity, outcome", [
    (True, Polarity.EXPECT_PASS, Outcome.PASSED),
    (False, Polarity.EXPECT_PASS, Outcome.FAILED),
    (False, Polarity.EXPECT_FAIL, Outcome.XFAILED),
    (True, Polarity.EXPECT_FAIL, Outcome.XPASSED),
])
def test_outcome_folds_polarity(passed, polarity, outcome):
    assert Verdict.outcome_for(passed, polarity) == outcome


@pytest.mark.parametrize("polarity", [Polarity.EXPECT_PASS, Polarity.EXPECT_FAIL])
def test_errored_outcome_is_always_failed(polarity):
    assert Verdict.outcome_for(False, polarity, errored=True) == Outcome.FAILED


def test_missing_file_raises(tmp_path):
    with pytest.raises(ScenarioFileError, match="not found"):
        YamlScenarioProvider(str(tmp_path / "nope.yaml")).get_scenarios()


def test_invalid_document_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("groups:\n  - name: g\n    scenarios:\n      - {id: A, title: t}\n", encoding="utf-8")

    with pytest.raises(ScenarioFileError, match="expectations"):
        YamlScenarioProvider(str(path)).get_scenarios()


def test_duplicate_ids_rejected(tmp_path):
    path = tmp_path / "dup.yaml"
    path.write_text(
        "groups:\n"
        "  - name: g\n"
        "    scenarios:\n"
        "      - {id: A, title: one, expectations: [{kind: non_empty}]}\n"
        "      - {id: A, title: two, expectations: [{kind: non_empty}]}\n",
        encoding="utf-8",
    )

    with pytest.raises(ScenarioFileError, match="duplicate scenario ids A"):
        YamlScenarioProvider(str(path)).get_scenarios()


def test_provider_exposes_target_url():
    provider = YamlScenarioProvider(SCENARIO_FILE)
    provider.get_scenarios()
    assert provider.target_url == "https://www.swifttranslator.com/"


class _Response:
    status = 200

    def __init__(self, body):
        self.body = body

    def read(self):
        return self.body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_api_provider_parses_json(monkeypatch):
    document = {"groups": [{"name": "remote", "polarity": "expect_fail",
                            "scenarios": [{"id": "R_1", "title": "remote", "input": "hari",
                                           "expectations": [{"kind": "non_empty"}]}]}]}
    body = json.dumps(document).encode("utf-8")
    monkeypatch.setattr("urllib.request.urlopen", lambda url, timeout: _Response(body))

    scenarios = APIProvider("https://cases.test/api").get_scenarios()

    assert [s.id for s in scenarios] == ["R_1"]
    assert scenarios[0].expect_fail


def test_api_provider_rejects_non_mapping(monkeypatch):
    monkeypatch.setattr("urllib.request.urlopen", lambda url, timeout: _Response(b"[]"))

    with pytest.raises(ScenarioFileError):
        APIProvider("https://cases.test/api").get_scenarios()


def test_api_provider_rejects_undecodable_body(monkeypatch):
    monkeypatch.setattr("urllib.request.urlopen", lambda url, timeout: _Response(b"\xff\xfe"))

    with pytest.raises(ScenarioFileError):
        APIProvider("https://cases.test/api").get_scenarios()


class _StalledResponse(_Response):
    def read(self):
        raise TimeoutError("The read operation timed out")


def test_api_provider_reports_read_timeout(monkeypatch):
    monkeypatch.setattr("urllib.request.urlopen", lambda url, timeout: _StalledResponse(b""))

    with pytest.raises(ScenarioFileError, match="timed out"):
        APIProvider("https://cases.test/api", timeout=1.0).get_scenarios()
