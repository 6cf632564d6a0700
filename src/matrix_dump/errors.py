"""Exception hierarchy for the matrix dumper."""


class DumpError(Exception):
    """Base class for all dumper exceptions."""


class ConfigError(DumpError):
    """Raised when required configuration is missing or invalid."""


class IOFailure(DumpError):
    """Raised when a filesystem read, write, open or close fails."""


class MalformedPartition(DumpError):
    """Raised when a partition file does not match its declared layout."""
