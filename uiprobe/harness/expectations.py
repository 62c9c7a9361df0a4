from typing import List, Optional

from uiprobe.models.scenario import Expectation, ExpectationKind


def check(expectation: Expectation, observed: str) -> Optional[str]:
    """Returns None when the expectation holds, otherwise a failure reason."""
    kind = expectation.kind
    expected = expectation.expected

    if kind == ExpectationKind.NON_EMPTY:
        if len(observed.strip()) > 0:
            return None
        return f"expected {expectation.source} to be non-empty, got empty text"

    if kind == ExpectationKind.EQUALS:
        if observed == expected:
            return None
        return f"expected {expectation.source} {expected!r}, got {observed!r}"

    if kind == ExpectationKind.LENGTH_EQUALS:
        if len(observed) == expected:
            return None
        return f"expected len({expectation.source}) == {expected}, got {len(observed)}"

    if kind == ExpectationKind.LENGTH_GREATER_THAN:
        if len(observed) > expected:
            return None
        return f"expected len({expectation.source}) > {expected}, got {len(observed)}"

    raise ValueError(f"Unknown expectation kind: {kind}")


def evaluate(expectations: List[Expectation], output: str, input_value: str = "") -> Optional[str]:
    """Checks expectations in order and stops at the first failure."""
    for expectation in expectations:
        observed = input_value if expectation.source == "input" else output
        reason = check(expectation, observed)
        if reason:
            return reason
    return None
