"""Error kinds raised by the diversity computations."""


class DiversityError(ValueError):
    """Base error for invalid diversity computations."""


class LengthMismatchError(DiversityError):
    """Raised when values and weights are of differing lengths."""


class DimensionMismatchError(DiversityError):
    """Raised when a similarity matrix does not match the number of categories."""


class DomainError(DiversityError):
    """Raised when a measure is requested outside of the domain it is defined for."""


class DegenerateWeightsError(DiversityError):
    """Raised when no weight survives normalisation in a power mean."""
