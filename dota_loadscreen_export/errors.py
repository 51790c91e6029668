"""Exception types raised while building the loading screen export."""


class ExportError(Exception):
    """Base class for all export errors."""


class ParseError(ExportError):
    """A line of items_game could not be interpreted."""

    def __init__(self, message: str, line: str = ""):
        super().__init__(f"{message}: {line!r}" if line else message)
        self.line = line


class NamingError(ExportError):
    """An item name carries the localization marker but has an unexpected shape."""
