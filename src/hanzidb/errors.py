"""
Error taxonomy shared by the store, the pipelines and the command surface.

Every error carries the operation that failed and the underlying cause, so a
host can show ``str(exc)`` to the user as-is.
"""


class HanziError(Exception):
    def __init__(self, operation: str, cause: object):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


class PathResolutionError(HanziError):
    """A logical resource name could not be mapped to a real path."""


class SourceReadError(HanziError):
    """A source file is missing or unreadable."""


class SourceParseError(HanziError):
    """A source record is malformed."""

    def __init__(self, operation: str, cause: object, line: int | None = None):
        self.line = line
        if line is not None:
            cause = f"line {line}: {cause}"
        super().__init__(operation, cause)


class StoreConnectionError(HanziError):
    pass


class StoreQueryError(HanziError):
    pass


class CharacterNotFound(StoreQueryError):
    def __init__(self, character: str):
        self.character = character
        super().__init__("get_by_character", f"Character '{character}' not found")

    def __str__(self) -> str:
        return f"Character '{self.character}' not found"


class StoreWriteError(HanziError):
    pass
