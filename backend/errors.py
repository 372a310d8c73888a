class ClarhError(Exception):
    """Base class for errors raised by the classification service."""


class ConfigurationError(ClarhError):
    """Deployment problem detected at start-up (missing key, bad timezone, ...)."""


class CompletionError(ClarhError):
    """The language-model provider failed to return a completion."""
