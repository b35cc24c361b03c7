"""Custom exceptions for DependencyMapper MCP Server."""


class DependencyMapperError(Exception):
    """Base exception for all DependencyMapper errors."""

    pass


class ValidationError(DependencyMapperError):
    """Errors related to input validation."""

    pass


class DiscoveryError(DependencyMapperError):
    """Errors related to source file discovery."""

    pass


class ParseError(DependencyMapperError):
    """A source file could not be read or scanned for imports."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot parse {path}: {reason}")
