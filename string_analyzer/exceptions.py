class StringAnalyzerError(Exception):
    """Base class for errors raised by the string analyzer core."""

    def __init__(self, value: str, message: str):
        self.value = value
        self.message = message
        super().__init__(message)


class DuplicateValueError(StringAnalyzerError):
    """Raised when a string is already stored."""

    def __init__(self, value: str):
        super().__init__(value, "String already exists in the system")


class NotFoundError(StringAnalyzerError):
    """Raised when a lookup or delete targets a string that isn't stored."""

    def __init__(self, value: str):
        super().__init__(value, "String does not exist in the system")
