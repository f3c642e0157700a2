"""Domain errors raised by `URLService`.

Store and generator errors are translated into these exactly once, inside
the service. The HTTP layer only ever sees this vocabulary.
"""


class URLServiceError(Exception):
    """Base class for URL service errors."""


class URLAlreadyExistsError(URLServiceError):
    """The original URL has already been shortened."""


class AliasGenerationFailedError(URLServiceError):
    """No alias could be generated for the request."""


class AliasSpaceExhaustedError(AliasGenerationFailedError):
    """Every allowed attempt produced an alias that was already taken."""


class URLNotFoundError(URLServiceError):
    """No URL is stored under the requested alias."""


class UnknownError(URLServiceError):
    """Unexpected storage failure; the cause is chained, never shown to callers."""
