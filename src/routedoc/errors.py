"""Exception types raised by routedoc."""


class RoutedocError(Exception):
    """Base class for all routedoc errors."""


class RouteParseError(RoutedocError):
    """A route file could not be parsed as JavaScript."""

    def __init__(self, file_path: str, message: str, line: int | None = None):
        self.file_path = file_path
        self.message = message
        self.line = line
        location = f"{file_path}:{line}" if line else file_path
        super().__init__(f"{location}: {message}")


class RoutesDirectoryError(RoutedocError):
    """The routes directory is missing or is not a directory."""


class SchemaDefinitionError(RoutedocError):
    """A schema registry, response mapping or config file is malformed."""
