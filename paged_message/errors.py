class PaginationError(Exception):
    """Base class for everything the paginator raises."""


class ConfigurationError(PaginationError):
    """An action list that can't be registered (bad kind, too many controls...)."""


class PageResolutionError(PaginationError):
    """The current page could not be turned into a message payload."""


class DispatchError(PaginationError):
    """Sending or editing the paginated message failed."""
