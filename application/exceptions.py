"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
Domain outcomes (not found, not allowed, wrong state) are returned as
values by the use cases; exceptions are reserved for infrastructure faults.
"""


class RepositoryError(Exception):
    """Error while reading from or writing to the persistence layer.

    Raised by infrastructure adapters when a query fails (network error,
    constraint violation, malformed row). Never retried by the engine.
    """

    pass
