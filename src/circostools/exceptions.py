"""Exception types raised by circostools."""


class ConfigurationError(ValueError):
    """A required option is missing or an option holds an invalid value."""


class InputNotFoundError(FileNotFoundError):
    """The input path was given but cannot be read."""


class MalformedRecordError(ValueError):
    """An input line cannot be read as part of a link record."""
