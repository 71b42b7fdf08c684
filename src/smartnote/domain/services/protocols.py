"""Domain service protocols."""

from typing import Protocol

from smartnote.domain.entities import ActivityStats, Group


class GroupSource(Protocol):
    """Read access to the groups held in memory."""

    def list_groups(self) -> list[Group]:
        """Return every group in insertion order."""
        ...

    def get_group(self, group_id: str) -> Group | None:
        """Return the group with the given ID, or None."""
        ...


class ActivitySource(Protocol):
    """Read access to the usage histograms."""

    @property
    def stats(self) -> ActivityStats:
        """Return a snapshot of the current activity stats."""
        ...
