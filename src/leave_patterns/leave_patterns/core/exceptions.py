class DomainError(Exception):
    """Base exception for leave analysis rule violations."""


class ValidationError(DomainError):
    """Raised when caller input is invalid and no computation is possible."""


class InvalidWindowError(ValidationError):
    """Raised when an analysis window ends before it starts."""


class ConfigurationError(ValidationError):
    """Raised when an analyzer option is unknown or out of range."""


class DetectorAbstained(DomainError):
    """Raised by a detector that declines to produce a flag."""


class InsufficientSampleError(DetectorAbstained):
    """Too few events for the detector's minimum sample size."""


class DegenerateBaselineError(DetectorAbstained):
    """The supplied peer baseline cannot be used (e.g. zero standard deviation)."""
