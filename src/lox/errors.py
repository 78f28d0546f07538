## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class LoxError(Exception):
    def __init__(self, message: str = "", *, offset: int = 0, length: int = 0):
        """Base class for all Lox-raised errors, located by a span in the source text."""
        super().__init__(message)
        self.message: str = message
        self.offset: int = offset
        self.length: int = length

    @classmethod
    def at(cls, message: str, span) -> "LoxError":
        return cls(message, offset=span.offset, length=span.length)

class LoxParseError(LoxError):
    pass

class LoxIncompleteParse(LoxParseError):
    """Source ended in the middle of a construct; more input could complete it."""
    pass

class LoxRuntimeError(LoxError, RuntimeError):
    pass

class LoxTypeError(LoxRuntimeError, TypeError):
    """Operands of the wrong runtime type, detected by the evaluator."""
    pass

class LoxNameError(LoxRuntimeError, NameError):
    pass
