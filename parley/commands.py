"""
Parley command layer: describe a command, its aliases, gates and grammar.

What this module provides
- Command: a named, aliased entry point owning
  • a root list of Argument nodes (the grammar),
  • an access level (permission gate),
  • a precondition (a callable returning an error message, or nothing),
  • an action receiving the Bindings of a successful parse.
- command(...): decorator turning a function into the action of a new Command.

Quick start
    from parley import Command, Argument

    ban = (
        Command("Ban", "ban", "banuser")
            .set_description("Bans a user")
            .restrict_access(2)
            .add_argument(Argument("user"))
            .add_argument(Argument("reason", optional=True))
            .set_action(lambda bindings: print(bindings["user"]))
    )
    ban.help()   # "Ban: Bans a user (Usage: ban <user> [reason])"

Design notes
- Builder calls are fluent and validate immediately; the registry re-validates
  the whole tree once when the command is added.
- Aliases are stored lower-case; alias lookup is case-insensitive.
"""
import functools
import operator
import re

from .arguments import Argument, infer, _ensure_ordering, _validate
from .bindings import Bindings
from .faults import *
from .usage import describe, generate
from .utils import *


class CommandType(type):
    """
    Metaclass providing read-only mirrored properties and stable reprs.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
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
            """
            Return a concise, stable representation with key metadata.

            Example
            - command(name='Ban', aliases=['ban'], ...)
            """
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


class Command(metaclass=CommandType):
    """
    A command users can run by typing one of its aliases.

    Parameters
    - name: str
      Friendly name, used in help and messages (not typed by users).
    - *aliases: str
      Words that invoke the command ("ban", "banuser"); stored lower-case.
    - description: str | Unset
    - access_level: int
      Minimum caller level allowed to run it (0 by default).
    - precondition: Callable[[Command], str | None] | Unset
      Returns a message when the command cannot run right now.
    - action: Callable[[Bindings], Any] | Unset
    - arguments: Iterable[Argument] | str
      Root grammar; a string is read with infer().
    """

    __introspectable__ = (
        "name",
        "aliases",
        "description",
        "access_level",
        "precondition",
        "action",
        "arguments",
    )

    __displayable__ = (
        "name",
        "aliases",
        "description",
        "access_level",
        "arguments",
    )

    def __init__(
            self,
            name,
            /,
            *aliases,
            description=Unset,
            access_level=0,
            precondition=Unset,
            action=Unset,
            arguments=(),
    ):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise InvalidNameError(f"{type(self).__typename__} 'name' cannot be empty")

        self._name = name
        self._aliases = []
        self._description = ""
        self._access_level = 0
        self._precondition = Unset
        self._action = Unset
        self._arguments = []

        self.add_alias(*aliases)
        if description is not Unset:
            self.set_description(description)
        self.restrict_access(access_level)
        if precondition is not Unset:
            self.set_precondition(precondition)
        if action is not Unset:
            self.set_action(action)
        if isinstance(arguments, str):
            self.infer_arguments(arguments)
        else:
            self.add_arguments(arguments)

    @classmethod
    def create(cls, name, /, *aliases, **metadata):
        return cls(name, *aliases, **metadata)

    def add_alias(self, *aliases):
        for alias in aliases:
            if not isinstance(alias, str):
                raise TypeError(f"{type(self).__typename__} aliases must be strings")
            elif not (alias := alias.strip()):
                raise InvalidNameError(f"{type(self).__typename__} aliases cannot be empty")
            elif any(character.isspace() for character in alias):
                raise InvalidNameError(f"{type(self).__typename__} alias {alias!r} cannot contain whitespace")
            self._aliases.append(alias.lower())
        return self

    def set_description(self, description, /):
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__typename__} 'description' must be a string")
        self._description = description
        return self

    def restrict_access(self, level, /):
        """
        Only callers with an access level >= level may run this command.
        """
        if not isinstance(level, int) or isinstance(level, bool):
            raise TypeError(f"{type(self).__typename__} 'access_level' must be an integer")
        self._access_level = level
        return self

    def set_action(self, action, /):
        if not callable(action):
            raise TypeError(f"{type(self).__typename__} 'action' must be callable")
        self._action = action
        return self

    def set_precondition(self, precondition, /):
        if not callable(precondition):
            raise TypeError(f"{type(self).__typename__} 'precondition' must be callable")
        self._precondition = precondition
        return self

    def add_argument(self, argument, /):
        if not isinstance(argument, Argument):
            raise TypeError(f"{type(self).__typename__} arguments must be arguments")
        _ensure_ordering(self._arguments, argument, f"command {self._name!r}")
        self._arguments.append(argument)
        return self

    def add_arguments(self, arguments, /):
        for argument in arguments:
            self.add_argument(argument)
        return self

    def infer_arguments(self, text, /):
        """
        Add arguments written in bracket notation, e.g. "<user> <item> [amount](10)".
        """
        return self.add_arguments(infer(text))

    def check(self):
        """
        Evaluate the precondition; return its message, or None when the command may run.
        """
        if self._precondition is Unset:
            return None
        return self._precondition(self) or None

    def execute(self, bindings=Unset, /, *, checked=False):
        """
        Run the action with the given bindings (empty when omitted).

        checked=True skips the precondition, for callers that already ran
        check() for this invocation.

        Raises
        - PreconditionFailedError when the precondition returns a message.
        - InvalidStateError when no action was set.
        """
        if not checked and (message := self.check()) is not None:
            raise PreconditionFailedError(message, command=self)
        if self._action is Unset:
            raise InvalidStateError(f"{type(self).__typename__} {self._name!r} has no action to execute")
        return self._action(coalesce(bindings, Bindings()))

    def usage(self, alias=Unset, prefix=""):
        return generate(self, alias, prefix)

    def help(self, alias=Unset, prefix=""):
        return describe(self, alias, prefix)

    def validate(self):
        """
        Re-check the whole grammar: sibling ordering and enum defaults.

        make_optional()/make_required() calls made after an argument was added
        are only caught here.
        """
        _validate(self._arguments, f"command {self._name!r}")
        return self

    def reset(self):
        for argument in self._arguments:
            argument.reset()
        return self

    def find(self, name, /):
        for argument in self._arguments:
            if (found := argument.find(name)) is not None:
                return found
        return None


def command(name, /, *aliases, **metadata):
    """
    Decorator turning a function into the action of a new Command.

    Usage
        @command("Ban", "ban", arguments="<user> [reason]", access_level=2)
        def ban(bindings):
            ...

    Returns
    - Callable[[Callable], Command]
    """
    @rename("command")
    def wrapper(action, /):
        if not callable(action):
            raise TypeError("@command() must be applied to a callable")
        return Command(name, *aliases, action=action, **metadata)

    return wrapper


__all__ = (
    "Command",
    "command",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del CommandType
