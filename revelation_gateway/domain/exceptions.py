"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataFetchError(DomainException):
    """Data store query failed or is unavailable"""

    pass


class QuoteProviderError(DomainException):
    """Quote provider returned an error or is unavailable"""

    pass


class MarketDataError(DomainException):
    """Market sentiment feed returned an error or malformed data"""

    pass


class GeneratorError(DomainException):
    """An insight generator failed on unexpected input"""

    def __init__(self, generator: str, cause: Exception):
        super().__init__(f"{generator} failed: {cause}")
        self.generator = generator
        self.cause = cause


class InvalidTransactionDataError(DomainException):
    """Transaction data is malformed or violates the sign convention"""

    pass


class UnknownBiasError(DomainException):
    """Requested bias key is not in the catalog"""

    pass


class RecordNotFoundError(DomainException):
    """Record does not exist or belongs to another user"""

    pass
