"""Custom exceptions for brew-share."""


class BrewShareError(Exception):
    """Base exception for brew-share."""

    pass


class EmptyImportError(BrewShareError):
    """Raised when there is nothing to import."""

    pass


class ImportFormatError(BrewShareError):
    """Raised when import data is neither method JSON nor shared method text."""

    pass


class DuplicateMethodError(BrewShareError):
    """Raised when an imported method's name is already taken."""

    pass
