## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class SprintfError(Exception):
    """Base class for all errors raised while parsing or rendering a format string."""
    pass


class FormatParseError(SprintfError):
    def __init__(self, message, *, source=None, position=None, token=None):
        super().__init__(message)
        self.source: str = source
        self.position: int = position
        self.token: str = token

    @property
    def line(self) -> int | None:
        if self.source is None or self.position is None: return None
        return self.source.count('\n', 0, self.position) + 1

    @property
    def column(self) -> int | None:
        if self.source is None or self.position is None: return None
        return self.position - (self.source.rfind('\n', 0, self.position) + 1) + 1

class MalformedPlaceholder(FormatParseError):
    pass

class InvalidIndexOrWidth(FormatParseError, ValueError):
    pass

class InvalidKeyPath(FormatParseError, ValueError):
    pass

class MixedPlaceholderStyle(FormatParseError):
    pass


class FormatRenderError(SprintfError):
    """Failures while resolving or rendering one placeholder against the arguments."""
    def __init__(self, message, *, placeholder=None):
        super().__init__(message)
        self.placeholder = placeholder

class ArgumentIndexOutOfRange(FormatRenderError, IndexError):
    pass

class KeyPathTraversalError(FormatRenderError, LookupError):
    def __init__(self, message, *, placeholder=None, key=None, value_type=None):
        super().__init__(message, placeholder=placeholder)
        self.key: str = key
        self.value_type: str = value_type

class NotANumber(FormatRenderError, ValueError):
    pass

class JSONEncodeError(FormatRenderError, ValueError):
    pass

class PrecisionParseError(FormatRenderError, ValueError):
    pass
