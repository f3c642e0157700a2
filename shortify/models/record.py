from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class URLRecord:
    """A shortened URL as the service and stores pass it around.

    Attributes:
        original (str):
            The full URL submitted for shortening.
        alias (str):
            The generated short identifier.
        id (Optional[int]):
            Identity assigned by the store on insert, None before that.

    Example:
        >>> record = URLRecord(original="https://example.com/a", alias="xY3kQ")
        >>> record.id is None
        True
        >>> record.with_id(7).id
        7
    """
    original: str
    alias: str
    id: Optional[int] = None

    def with_id(self, id: int) -> "URLRecord":
        return replace(self, id=id)
