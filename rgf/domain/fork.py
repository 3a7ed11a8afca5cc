"""Domain entities for forks and the remotes derived from them."""

from dataclasses import dataclass
from datetime import datetime

# Prefix of every remote created by rgf
REMOTE_PREFIX = "rgf__"


@dataclass(frozen=True)
class Fork:
    """Immutable fork entity as returned by the fork listing."""

    full_name: str
    clone_url: str
    forks_count: int

    @property
    def remote_name(self) -> str:
        return derive_remote_name(self.full_name)


@dataclass(frozen=True)
class RateLimit:
    """Snapshot of the API quota."""

    used: int
    limit: int
    remaining: int
    reset: int  # epoch seconds

    @property
    def reset_at(self) -> datetime:
        """Reset time as an aware datetime in the local timezone."""
        return datetime.fromtimestamp(self.reset).astimezone()


def derive_remote_name(full_name: str) -> str:
    """Map "owner/name" to "rgf__owner_name"."""
    return (REMOTE_PREFIX + full_name).replace("/", "_")


def is_managed_remote(remote_name: str) -> bool:
    return remote_name.startswith(REMOTE_PREFIX)
