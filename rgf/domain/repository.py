"""Domain entities for GitHub repository identifiers."""

from dataclasses import dataclass


class InvalidRepositoryFormat(ValueError):
    """Raised when a repository string is not in <owner>/<name> form."""
    pass


@dataclass(frozen=True)
class RepositoryIdentifier:
    """Immutable <owner>/<name> repository identifier."""

    owner: str
    name: str

    @classmethod
    def parse(cls, text: str) -> "RepositoryIdentifier":
        """
        Parse an <owner>/<name> string.

        Args:
            text: Repository string, e.g. "google/battery-historian"

        Returns:
            Parsed repository identifier

        Raises:
            InvalidRepositoryFormat: If the string does not split into exactly
                two non-empty parts on "/"
        """
        parts = text.split("/")
        if len(parts) != 2 or not all(parts):
            raise InvalidRepositoryFormat(
                f"Invalid repository format '{text}': expected <owner>/<repo>"
            )
        return cls(owner=parts[0], name=parts[1])

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class PageCursor:
    """One page of a paginated listing."""

    page_size: int = 10
    page: int = 1

    def __post_init__(self):
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
