from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResourceOptions:
    """
    Static metadata for one API resource.

    name is the plural resource name used as the list key in responses,
    path is the collection path and envelope is the body key for writes.
    """

    name: str
    path: str
    envelope: str | None = None

    @property
    def member_path(self) -> str:
        return f"{self.path}/:identity"


@dataclass
class PaginationOptions:
    """
    Optional guards for a pagination run.

    Both are disabled by default: a run then ends only when the server
    returns a page without a next cursor.
    """

    max_pages: int | None = None
    detect_repeated_cursor: bool = False

    def __post_init__(self) -> None:
        if self.max_pages is not None and self.max_pages < 1:
            raise ValueError(f"max_pages must be a positive integer, got {self.max_pages}")


@dataclass
class RequestSettings:
    """Per-call customisation forwarded to the request executor."""

    headers: dict[str, str] = field(default_factory=dict)

    def merged_headers(self, base: dict[str, str] | None = None) -> dict[str, str]:
        """
        Returns base headers overlaid with these settings' headers.

        Args:
            base: Headers the SDK sets itself (e.g. Idempotency-Key)

        Returns:
            A new dict; settings win on conflicting names
        """
        merged = dict(base or {})
        merged.update(self.headers)
        return merged
