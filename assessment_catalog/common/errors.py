"""Domain errors and failure typing."""


class CatalogError(Exception):
    """Base class for catalog failures."""

    error_code = "CATALOG_ERROR"


class ConfigError(CatalogError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class LoadError(CatalogError):
    """Raised when the assessment source cannot be read or parsed."""

    error_code = "LOAD_ERROR"


class SourceError(LoadError):
    """Raised when the assessment source cannot be opened."""

    error_code = "SOURCE_ERROR"
