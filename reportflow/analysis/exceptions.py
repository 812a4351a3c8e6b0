class AnalysisError(Exception):
    """Raised when report analysis fails."""


class AnalysisValidationError(AnalysisError):
    """Raised when the model response does not have the required shape."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
