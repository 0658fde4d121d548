r"""
Parley argument grammar.

Overview
- Argument: one positional slot of a command grammar. A node is required,
  optional, or an enum (restricted to the names of its option children), may
  carry a default and a validation rule, and may own nested children:
  • non-enum node: children are parsed sequentially after the node is bound,
    e.g. "[target [reason]]".
  • enum node: children are the mutually exclusive options; each option may own
    its own nested sub-grammar, e.g. "[read|clear|send <user> <message>]".
- ArgumentKind: tagged view of a node (REQUIRED, OPTIONAL, ENUM) used by the
  matcher to dispatch.
- infer(text): build a flat argument list from bracket notation
  ("<user> <item> [amount](10)").

Invariants (checked by the builder call that would break them)
- Names are non-empty strings (InvalidNameError).
- Sibling ordering: once a sibling is optional, every later sibling is optional
  (OrderingViolationError).
- A default satisfies the rule (InvalidValueError) and is only allowed on an
  optional or enum node (InvalidStateError).

Parse state
- value is the only field written while parsing: bind(raw) stores a validated
  token (or the default when raw is empty) and reset() restores the defaults of
  the whole subtree once the parse is over.
"""
import functools
import operator
import re
from enum import Enum

from .faults import *
from .rules import ALWAYS, ValidationRule
from .utils import *


class ArgumentKind(Enum):
    """
    tagged view of an argument node.

    ENUM wins over OPTIONAL: an optional enum is still dispatched as ENUM, its
    optionality only decides what happens when no option matches.
    """
    REQUIRED = "required"
    OPTIONAL = "optional"
    ENUM = "enum"


class ArgumentType(type):
    """
    Metaclass that exposes introspectable fields as read-only properties and
    provides stable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _ensure_ordering(siblings, candidate, owner, /):
    """
    Internal: reject a required candidate appended after an optional sibling.
    """
    if not candidate.optional and any(sibling.optional for sibling in siblings):
        raise OrderingViolationError(
            f"{owner} cannot take required argument {candidate.name!r} after an optional one; "
            f"optional arguments must come last"
        )


def _validate(siblings, owner, /):
    """
    Internal: check a whole (sub)tree once it is complete.

    - ordering invariant of every sibling list;
    - an enum default names one of the options (options may be added after
      the default, so this cannot be checked by set_default).
    """
    seen = []
    for sibling in siblings:
        _ensure_ordering(seen, sibling, owner)
        seen.append(sibling)
        if sibling._enum and sibling._default is not Unset and sibling.option(sibling._default) is None:
            raise InvalidValueError(
                f"default {sibling._default!r} of argument {sibling.name!r} does not name one of its options"
            )
        _validate(sibling._arguments, f"argument {sibling.name!r}")


class Argument(metaclass=ArgumentType):
    """
    Positional grammar node.

    Built once, before parsing, through fluent calls that validate invariants
    immediately:

        Argument("type", optional=True)
            .add_option(Argument("read"))
            .add_option(Argument("send").add_arguments([Argument("user"), Argument("message")]))

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes;
      containers are returned as fresh copies.
    """

    __introspectable__ = (
        "name",
        "optional",
        "enum",
        "default",
        "rule",
        "arguments",
        "value",
    )

    __displayable__ = (
        "name",
        "optional",
        "enum",
        "default",
        "rule",
        "arguments",
    )

    def __init__(self, name, /, optional=False):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise InvalidNameError(f"{type(self).__typename__} 'name' cannot be empty")

        self._name = name
        self._optional = bool(optional)
        self._enum = False
        self._default = Unset
        self._rule = ALWAYS
        self._arguments = []
        self._value = ""

    @classmethod
    def create(cls, name, /, optional=False):
        """
        Alias of the constructor, reads well at the start of a fluent chain.
        """
        return cls(name, optional)

    @property
    def kind(self):
        if self._enum:
            return ArgumentKind.ENUM
        if self._optional:
            return ArgumentKind.OPTIONAL
        return ArgumentKind.REQUIRED

    def make_optional(self):
        self._optional = True
        return self

    def make_required(self):
        if self._default is not Unset and not self._enum:
            raise InvalidStateError(
                f"{type(self).__typename__} {self._name!r} has a default and cannot become required"
            )
        self._optional = False
        return self

    def make_enum(self):
        """
        Restrict the argument to the names of its options (added with add_option).
        """
        if self._arguments and not self._enum:
            raise InvalidStateError(
                f"{type(self).__typename__} {self._name!r} already has nested arguments and cannot become an enum"
            )
        self._enum = True
        return self

    def add_argument(self, argument, /):
        """
        Add a nested argument, parsed after this one is bound.

        Nested arguments are parsed in the order they are added; optional ones
        must come last.
        """
        if not isinstance(argument, Argument):
            raise TypeError(f"{type(self).__typename__} nested arguments must be arguments")
        if self._enum:
            raise InvalidStateError(
                f"enum {type(self).__typename__} {self._name!r} only accepts options (use add_option)"
            )
        _ensure_ordering(self._arguments, argument, f"argument {self._name!r}")
        self._arguments.append(argument)
        return self

    def add_arguments(self, arguments, /):
        for argument in arguments:
            self.add_argument(argument)
        return self

    def add_option(self, option, /):
        """
        Add a legal value; the argument becomes an enum.

        The option's name is the accepted token (case-insensitive); the option
        may own nested arguments parsed when it is chosen.
        """
        if not isinstance(option, Argument):
            raise TypeError(f"{type(self).__typename__} options must be arguments")
        if self._arguments and not self._enum:
            raise InvalidStateError(
                f"{type(self).__typename__} {self._name!r} already has nested arguments and cannot take options"
            )
        self._enum = True
        _ensure_ordering(self._arguments, option, f"argument {self._name!r}")
        self._arguments.append(option)
        return self

    def add_options(self, *options):
        for option in options:
            self.add_option(option)
        return self

    def set_validator(self, rule, /):
        """
        Replace the validation rule.

        An already-set default is not re-validated: set the validator first.
        """
        if not isinstance(rule, ValidationRule):
            raise TypeError(f"{type(self).__typename__} validator must be a validation rule")
        self._rule = rule
        return self

    def set_default(self, value, /):
        value = str(value)
        if not self._rule(value):
            raise InvalidValueError(
                f"default {value!r} of {type(self).__typename__} {self._name!r} "
                f"does not fulfill the validation rule"
            )
        if not self._optional and not self._enum:
            raise InvalidStateError(
                f"{type(self).__typename__} {self._name!r} must be optional or an enum to have a default"
            )
        self._default = value
        if not self._value:
            self._value = value
        return self

    def is_valid(self, value, /):
        return self._rule(value)

    def option(self, token, /):
        """
        Return the option whose name matches token (case-insensitive), or None.
        """
        token = token.casefold()
        for option in self._arguments if self._enum else ():
            if option._name.casefold() == token:
                return option
        return None

    def find(self, name, /):
        """
        Depth-first search of this node and its descendants by name; None when absent.
        """
        if self._name.casefold() == name.casefold():
            return self
        for argument in self._arguments:
            if (found := argument.find(name)) is not None:
                return found
        return None

    def bind(self, raw, /):
        """
        Store a parsed token.

        A non-empty token must satisfy the rule; an empty one falls back to the
        default (possibly empty).
        """
        if not isinstance(raw, str):
            raise TypeError(f"{type(self).__typename__} values must be strings")
        if raw and not self._rule(raw):
            raise ArgumentValidationFailedError(
                f"Argument '{self._name}' is invalid. Must be a valid {self._rule.error}.",
                argument=self,
                input=raw,
                rule=self._rule,
            )
        self._value = raw or coalesce(self._default, "")
        return self

    def _select(self, option, /):
        """
        Internal: store the canonical name of a chosen option.

        The options are the legal values of an enum, so the rule is not applied.
        """
        self._value = option.name
        return self

    def reset(self):
        """
        Restore the default value of this node and of every descendant.
        """
        self._value = ""
        self.bind("")
        for argument in self._arguments:
            argument.reset()
        return self


def infer(text, /):
    """
    Build arguments from bracket notation.

    Syntax
    - <name>          required argument
    - [name]          optional argument
    - [name](value)   optional argument with a default

    Example
        >>> [argument.name for argument in infer("<user> <item> [amount](10)")]
        ['user', 'item', 'amount']

    Raises
    - MalformedGrammarError for tokens that are not bracketed properly.
    - InvalidNameError for empty brackets.
    - InvalidStateError for a default on a required argument.
    - OrderingViolationError when a required argument follows an optional one.
    """
    if not isinstance(text, str):
        raise TypeError("infer() argument must be a string")
    elif not (text := text.strip()):
        raise MalformedGrammarError("infer() argument cannot be empty")

    arguments = []
    for position, token in enumerate(text.split(), 1):
        match = re.fullmatch(r"(?:<(?P<required>[^<>\[\]()]*)>|\[(?P<optional>[^<>\[\]()]*)\])(?:\((?P<default>[^()]*)\))?", token)
        if match is None:
            raise MalformedGrammarError(
                f"argument {token!r} is not defined properly; arguments must be surrounded "
                f"with <> if they are required, or [] if they are optional"
            )
        optional = match["optional"] is not None
        name = match["optional"] if optional else match["required"]
        if not name.strip():
            raise InvalidNameError(f"argument {position} must contain a name within its brackets")

        argument = Argument(name, optional)
        if match["default"]:
            argument.set_default(match["default"])
        _ensure_ordering(arguments, argument, "inferred grammar")
        arguments.append(argument)
    return arguments


__all__ = (
    "Argument",
    "ArgumentKind",
    "infer",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
