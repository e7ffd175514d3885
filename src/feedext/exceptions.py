"""
Feed Extension Exceptions

Custom exception hierarchy for extension loading, matching and serialization.
"""


class FeedExtensionError(Exception):
    """Base feed extension exception."""

    def __init__(self, message: str, argument: str = None):
        super().__init__(message)
        self.message = message
        self.argument = argument

    def __str__(self):
        if self.argument:
            return f"{self.message} (argument: {self.argument})"
        return self.message


class ExtensionArgumentError(FeedExtensionError, ValueError):
    """Invalid argument supplied to an extension operation."""

    def __init__(self, message: str = "Invalid argument", argument: str = None):
        super().__init__(message, argument)


class ExtensionTypeMismatchError(ExtensionArgumentError, TypeError):
    """Two extensions of different vocabularies were ordered against each other."""

    def __init__(self, expected: type, actual: type):
        super().__init__(
            f"obj is not of type {expected.__module__}.{expected.__qualname__}, "
            f"type was found to be '{actual.__module__}.{actual.__qualname__}'",
            argument="other",
        )
        self.expected = expected
        self.actual = actual


class ExtensionRegistrationError(FeedExtensionError):
    """Extension type could not be registered or unregistered."""

    def __init__(self, message: str = "Registration error", namespace: str = None):
        super().__init__(message)
        self.namespace = namespace

    def __str__(self):
        if self.namespace:
            return f"{self.message} [{self.namespace}]"
        return self.message


class ExtensionXMLError(FeedExtensionError):
    """XML parsing error."""

    def __init__(self, message: str = "XML error"):
        super().__init__(message)


class ExtensionConfigError(FeedExtensionError):
    """Invalid configuration data."""

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message)


def require(value, argument: str):
    """Raise ExtensionArgumentError if value is None."""
    if value is None:
        raise ExtensionArgumentError(f"{argument} must not be None", argument)
    return value


def require_text(value, argument: str) -> str:
    """Raise ExtensionArgumentError if value is None or blank; return it trimmed."""
    if value is None or not str(value).strip():
        raise ExtensionArgumentError(f"{argument} must not be null or empty", argument)
    return str(value).strip()
