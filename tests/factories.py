"""Builders shared by tests."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from aeobro.domain.model.profile import Profile
from aeobro.domain.value import ProfileId, UserId
from aeobro.util.clock import Clock

T0 = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


class FixedClock(Clock):
    """Clock pinned to a settable instant."""

    def __init__(self, now: datetime = T0) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        """Move time forward, e.g. `advance(hours=2)`."""
        self.current += timedelta(**kwargs)


def make_profile(user_id: UserId | None = None, **overrides) -> Profile:
    """Build a published LITE profile with a unique slug."""
    profile_id = ProfileId(uuid4())
    fields = {
        "id": profile_id,
        "user_id": user_id or UserId(uuid4()),
        "slug": f"brand-{profile_id.hex[:8]}",
        "display_name": "Acme Studio",
        "created_at": T0,
        "updated_at": T0,
    }
    fields.update(overrides)
    return Profile(**fields)
