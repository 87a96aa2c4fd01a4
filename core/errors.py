class DecisionEngineError(Exception):
    """Base class for decision engine exceptions."""
    pass


class InvalidDateFormat(DecisionEngineError, ValueError):
    """Raised when a scenario start date cannot be parsed as a calendar date."""

    def __init__(self, value):
        super().__init__(f"Invalid ISO date: {value!r}")
        self.value = value


class ScenarioPayloadError(DecisionEngineError, ValueError):
    """Raised when a serialized scenario does not have the expected shape."""
    pass


class ScenarioStoreError(DecisionEngineError):
    """Raised when the scenario store cannot complete a database operation."""

    def __init__(self, message, original_exception=None):
        super().__init__(message)
        self.original_exception = original_exception
