"""Caller context passed to every service call."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class UserContext:
    """Who is calling and what day it is for them.

    Attributes:
        user_id: Owner of every record read or written in the call.
        clock: Returns the caller's current calendar date.
    """

    user_id: int
    clock: Callable[[], date] = date.today

    def today(self) -> date:
        return self.clock()

    @classmethod
    def on(cls, user_id: int, day: date) -> "UserContext":
        """Context pinned to a fixed date."""
        return cls(user_id=user_id, clock=lambda: day)
