"""Exception types raised by shot-planner."""
from __future__ import annotations


class ShotPlannerError(Exception):
    """Base class for shot-planner failures."""


class InvalidInputError(ShotPlannerError, ValueError):
    """A breakdown precondition was violated.

    ``precondition`` names the violated rule, e.g. ``"acts_non_empty"``.
    Retrying with the same input reproduces the same error.
    """

    def __init__(self, precondition: str, message: str) -> None:
        super().__init__(f"{precondition}: {message}")
        self.precondition = precondition
        self.message = message
