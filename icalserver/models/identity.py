"""Authenticated identity model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Verified username, valid for the request that produced it."""

    username: str

    def owns(self, owner: str) -> bool:
        """Check if this identity may write calendars under owner."""
        return self.username == owner
