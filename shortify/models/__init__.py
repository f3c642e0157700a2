"""
Data models for Shortify.

`URL` is the SQLAlchemy table, `URLRecord` is the immutable value the
service layer works with regardless of which store backs it.
"""

from .record import URLRecord
from .url import URL

__all__ = ["URL", "URLRecord"]
