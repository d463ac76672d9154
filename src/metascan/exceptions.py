"""metascan — Exception hierarchy."""


class MetascanError(Exception):
    """Base metascan exception."""


class MetadataMissingError(MetascanError):
    """No metadata map was supplied to the scoring engine."""


class ConfigurationError(MetascanError):
    """A scoring configuration override is invalid or unreadable."""
