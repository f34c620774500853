## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class StringfError(Exception):
    """Base class for all errors raised while building or running a formatter."""
    pass

class InputShapeError(StringfError, TypeError):
    pass

class UnknownConversionError(StringfError, LookupError):
    def __init__(self, message: str = "", *, conversion=None, source=None):
        super().__init__(message)
        self.conversion: str = conversion
        self.source: str = source

class MissingNamedInputError(StringfError, LookupError):
    def __init__(self, message: str = "", *, key=None):
        super().__init__(message)
        self.key: str = key

class ReservedConversionError(StringfError, ValueError):
    pass

class ConfigurationError(StringfError, ValueError):
    pass


class MalformedFormatError(StringfError, ValueError):
    """Only raised by the strict tokenizer; the default one falls back to literal text."""
    def __init__(self, message, *, position=None, token=None):
        super().__init__(message)
        self.position = position
        self.token = token
