class AnalysisError(Exception):
    """Base class for failures of the beak-depth analysis."""

    pass


class FitFailure(AnalysisError):
    """Raised when the least-squares fit is singular or otherwise degenerate."""

    pass


class TransformFailure(AnalysisError):
    """Raised when the power transform cannot be estimated or applied."""

    pass


class InsufficientData(AnalysisError):
    """Raised when a group has too few observations for a variance-based statistic."""

    pass
