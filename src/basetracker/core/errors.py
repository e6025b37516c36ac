class TrackerError(Exception):
    pass


class InvalidAddress(TrackerError, ValueError):
    pass


class NoTransactionsFound(TrackerError):
    pass


class LookupInProgress(TrackerError):
    pass


class DataSourceError(TrackerError):
    pass


class NetworkError(DataSourceError):
    """Transient failure reaching a remote data source (connection, timeout)."""
