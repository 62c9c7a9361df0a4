import json
import os
from collections import Counter
from typing import Dict, Iterable, List

from uiprobe.models.scenario import Outcome, Verdict

_LABELS = {
    Outcome.PASSED: "PASS ",
    Outcome.FAILED: "FAIL ",
    Outcome.XFAILED: "XFAIL",
    Outcome.XPASSED: "XPASS",
}


def format_verdict(verdict: Verdict) -> str:
    line = f"[{_LABELS[verdict.outcome]}] {verdict.scenario}"
    if verdict.outcome in (Outcome.PASSED, Outcome.XPASSED):
        return line
    kind = verdict.error_kind or "assertion"
    return f"{line}\n        {kind}: {verdict.reason}\n        observed: {verdict.observed_output[:120]!r}"


def summarize(verdicts: Iterable[Verdict]) -> Dict[str, int]:
    counts = Counter(v.outcome.value for v in verdicts)
    return {outcome.value: counts.get(outcome.value, 0) for outcome in Outcome}


def format_summary(verdicts: List[Verdict]) -> str:
    counts = summarize(verdicts)
    parts = [f"{count} {name}" for name, count in counts.items() if count]
    return f"{len(verdicts)} scenarios: " + (", ".join(parts) or "nothing ran")


def exit_code(verdicts: Iterable[Verdict]) -> int:
    """Non-zero when any scenario failed unexpectedly or an expected failure passed."""
    for verdict in verdicts:
        if verdict.outcome in (Outcome.FAILED, Outcome.XPASSED):
            return 1
    return 0


def write_json_report(verdicts: List[Verdict], path: str):
    directory = os.path.dirname(path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory)

    output_data = {
        "summary": summarize(verdicts),
        "results": [v.to_report() for v in verdicts],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2, ensure_ascii=False)
