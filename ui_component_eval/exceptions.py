"""Exception hierarchy for the evaluation harness."""

from __future__ import annotations


class HarnessError(Exception):
    """Base class for all harness errors."""


class ConfigurationError(HarnessError):
    """One or more startup problems detected before any network call.

    Parameters
    ----------
    errors : list[str]
        Every problem found, in detection order.
    """

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class DatasetError(ConfigurationError):
    """The dataset file is malformed or contains an invalid record."""


class CompletionFailure(HarnessError):
    """Transport, authentication, or backend failure during a completion call."""
