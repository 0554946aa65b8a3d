class TrilaterationError(Exception):
    """Base class for every error raised by the estimator."""


class InvalidInput(TrilaterationError, ValueError):
    """Sites, amplitudes or the initial guess cannot be used for a fit."""


class ConvergenceFailure(TrilaterationError, RuntimeError):
    """The least-squares solver stopped without reaching its tolerances."""

    def __init__(self, message: str, status: int = 0, nfev: int = 0):
        super().__init__(message)
        self.status = status
        self.nfev = nfev
