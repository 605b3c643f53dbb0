class ScraperError(Exception):
    """Base class for errors raised by the scraper."""


class TransportError(ScraperError):
    """The search page could not be fetched (network error, timeout, bad status)."""


class ExtractionContractViolation(ScraperError):
    """A block or field spec is structurally unusable; isolated to one block."""


class ValidationError(ScraperError):
    """Rejected input at the service boundary, before any fetch happens."""
