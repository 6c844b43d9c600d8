"""DSTest custom exceptions."""

class DSTestError(Exception):
    """Base exception for DSTest."""
    pass

class ConfigurationError(DSTestError):
    """Raised when configuration is invalid."""
    pass

class UpstreamFetchError(DSTestError):
    """Raised when a test run or transaction pool cannot be retrieved."""
    pass

class TestRunNotFoundError(UpstreamFetchError):
    """Raised when the configuration service has no such test run."""
    pass

class DatabaseError(DSTestError):
    """Raised when database operations fail."""
    pass

class CollectorError(DSTestError):
    """Raised when collecting results for a test run fails."""
    pass

class FormatterError(DSTestError):
    """Raised when report formatting fails."""
    pass
