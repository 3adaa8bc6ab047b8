"""
Domain Exceptions - Falhas de configuração, busca e cache
Clean Architecture: Domain layer exceptions
"""


class DomainException(Exception):
    """Base exception for all domain-level errors"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DomainException):
    """Raised when the API credential is missing or still the placeholder"""
    pass


class FetchError(DomainException):
    """Base for every failure of the remote weather fetch"""
    pass


class LocationNotFoundException(FetchError):
    """Raised when the provider does not know the requested location"""

    def __init__(self, location_query: str, details: dict = None):
        super().__init__(
            f"City '{location_query}' not found",
            details={"location": location_query, **(details or {})}
        )
        self.location_query = location_query


class InvalidCredentialException(FetchError):
    """Raised when the provider rejects the API key"""
    pass


class ProviderUnavailableException(FetchError):
    """Raised on transport failures, timeouts and unexpected HTTP statuses"""
    pass


class MalformedResponseException(FetchError):
    """Raised when the provider body is not a usable weather payload"""
    pass


class CacheIOException(DomainException):
    """Raised when the cache document cannot be written or removed"""
    pass
