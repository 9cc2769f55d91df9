"""Exceptions and warnings raised by category computations."""


class CategoryError(ValueError):
    """Base class for violated categorical preconditions."""


class NotSemisimpleError(CategoryError):
    """Operation needs finite Hom-spaces and full decomposability."""


class NotSimpleError(CategoryError):
    """Object has an endomorphism algebra of dimension != 1."""


class SolverError(CategoryError):
    """
    The polynomial back end failed on an ideal it should handle.

    Carries the candidate object and the unknown count so the caller can
    decide whether to retry with a different setup.
    """

    def __init__(self, message, candidate=None, n_unknowns=None):
        self.message = message
        self.candidate = candidate
        self.n_unknowns = n_unknowns
        details = []
        if candidate is not None:
            details.append(f"candidate={candidate}")
        if n_unknowns is not None:
            details.append(f"unknowns={n_unknowns}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class IncompleteSearchWarning(UserWarning):
    """A half-braiding search ended before accounting for every solution."""
