"""
Parley validation rules.

A ValidationRule is a named predicate over raw (string) tokens. Arguments carry
one rule each (ALWAYS by default); a non-empty token must satisfy it before it
is bound, and a default must satisfy it when it is set.

The label is the user-facing noun used in errors:
    "Argument 'amount' is invalid. Must be a valid number."

Built-in rules
- ALWAYS        accepts everything (the default rule)
- INTEGER       whole numbers, optionally negative
- EMAIL         e-mail addresses (case-insensitive)
- ALPHANUMERIC  a letter followed by letters/digits

Custom rules
    >>> @rule("IP Address")
    ... def address(value):
    ...     return value.count(".") == 3
    >>> address("127.0.0.1")
    True
"""
import re

from .utils import rename


class ValidationRule:
    """
    Named predicate constraining an argument's raw token.

    Parameters
    - label: str
      Friendly name shown in errors ("Must be a valid <label>."). May be empty
      only for the built-in ALWAYS rule, which never fails.
    - predicate: Callable[[str], bool]
      Returns a truthy value when the string passes the rule.
    """
    __slots__ = ("_label", "_predicate")

    def __init__(self, label, predicate, /):
        if not isinstance(label, str):
            raise TypeError("validation rule 'label' must be a string")
        if not callable(predicate):
            raise TypeError("validation rule 'predicate' must be callable")
        self._label = label.strip()
        self._predicate = predicate

    @property
    def label(self):
        return self._label

    @property
    def error(self):
        """
        The label as it reads inside an error sentence (lower-cased).
        """
        return self._label.lower()

    def __call__(self, value, /):
        if not isinstance(value, str):
            raise TypeError("validation rules only apply to strings")
        return bool(self._predicate(value))

    def __repr__(self):
        return f"validation-rule(label={self._label!r})"

    def __rich_repr__(self):
        yield "label", self._label


def _pattern(label, expression, flags=0):
    pattern = re.compile(expression, flags)
    return ValidationRule(label, rename(lambda value: pattern.fullmatch(value) is not None, label or "always"))


ALWAYS = ValidationRule("", lambda value: True)
INTEGER = _pattern("Number", r"-?\d+")
EMAIL = _pattern("Email", r"[A-Z0-9._%+-]+@[A-Z][A-Z0-9.-]+\.[A-Z]{2,26}", re.IGNORECASE)
ALPHANUMERIC = _pattern("Alphanumeric string", r"[a-zA-Z][a-zA-Z0-9]*")


def rule(label, /):
    """
    Decorator/factory for defining a custom validation rule.

    Usage
        @rule("Port")
        def port(value):
            return value.isdigit() and 0 < int(value) < 65536

    Returns
    - ValidationRule wrapping the decorated predicate.
    """
    if not isinstance(label, str) or not label.strip():
        raise TypeError("@rule() label must be a non-empty string")

    @rename("rule")
    def wrapper(predicate, /):
        if not callable(predicate):
            raise TypeError("@rule() must be applied to a callable")
        return ValidationRule(label, predicate)

    return wrapper


__all__ = (
    "ValidationRule",
    "ALWAYS",
    "INTEGER",
    "EMAIL",
    "ALPHANUMERIC",
    "rule",
)
