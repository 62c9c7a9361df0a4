class ProbeError(Exception):
    """Base class for failures that end a single scenario."""
    kind = "error"


class LocatorError(ProbeError):
    kind = "locator"

    def __init__(self, message: str = "no input field found"):
        super().__init__(message)


class InteractionError(ProbeError):
    """Element was not interactable, detached or otherwise refused the gesture."""
    kind = "interaction"


class ProbeTimeoutError(ProbeError):
    kind = "timeout"


class ScenarioFileError(Exception):
    """The scenario catalogue could not be read or did not validate."""
