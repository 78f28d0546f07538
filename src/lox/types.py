## lox — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class Nil:
    """The Lox `nil` value.  Python's `None` stays free to mean "no value" inside environments."""
    __slots__ = ()
    _nil_singleton = None

    def __new__(cls):
        # Only one singleton creation is allowed, and it's the one just below.
        if cls._nil_singleton is None:
            cls._nil_singleton = super().__new__(cls)
            return cls._nil_singleton
        raise ValueError("Use the canonical `nil` instance")

    def __repr__(self):
        return "nil"

    def __bool__(self):
        raise TypeError("Nil truth value is ambiguous; compare with `is nil` or `is not nil`.")

    # All nils are equal, so ordering between them is that of equal items.
    def __lt__(self, other): return False if other is self else NotImplemented
    def __gt__(self, other): return False if other is self else NotImplemented
    def __le__(self, other): return True if other is self else NotImplemented
    def __ge__(self, other): return True if other is self else NotImplemented

    def __reduce__(self):
        return (_get_nil, ())


def _get_nil():
    return nil


# All checks for the nil value must be done by comparing to this.
nil = Nil()


Value = float | str | bool | Nil


TYPE_NAMES: dict[type, str] = {
    float: 'Number',
    str: 'Str',
    bool: 'Bool',
    Nil: 'Nil',
}


def type_name(value: Value) -> str:
    """Name of the runtime type of `value`, as shown in error messages."""
    try:
        return TYPE_NAMES[type(value)]
    except KeyError:
        raise TypeError(f"`{type(value).__name__}` is not a Lox value.") from None


def is_value(x) -> bool:
    return type(x) in TYPE_NAMES
