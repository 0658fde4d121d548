"""
Parley registry: the dispatcher in front of a set of commands.

Registry.parse(line) runs one input line through the whole pipeline:

    prefix -> tokenize -> alias lookup -> permission -> precondition
           -> match -> action -> reset

Every ParseError raised on the way is reported once through trigger(): to the
error sink when one is configured, otherwise rendered with rich on stderr. The
action only runs after a fully successful match, and the command's argument
values are reset afterwards whatever happened.

Example
    registry = Registry(prefix="/", error=lambda fault: print(fault))

    @registry.command("Ban", "ban", arguments="<user> [reason]", access_level=2)
    def ban(bindings):
        print("banned", bindings["user"])

    registry.parse("/ban bob spamming", access_level=3)   # True, action runs
    registry.parse("hello everyone")                      # False, not a command
"""
import logging

from rich.table import Table
from rich.text import Text

from .commands import Command, command
from .faults import *
from .faults import trigger as _trigger
from .matcher import match
from .suggestions import AffixSuggester
from .tokens import tokenize
from .utils import *

logger = logging.getLogger(__name__)


class Registry:
    """
    Ordered set of commands plus the options used to parse and report.

    Parameters
    - prefix: str
      Marker commands must start with ("/" by default, "" accepts every line).
    - error: Callable[[ParseError], Any] | Unset
      Error sink; receives every fault (str(fault) is the message).
    - suggester: Callable[[str, Sequence[Command]], list[str]] | Unset
      "Did you mean" strategy; AffixSuggester() when unset.
    - colorful, fancy: bool
      Rendering flags for faults printed by rich (no sink configured).
    """

    def __init__(self, prefix="/", error=Unset, *, suggester=Unset, colorful=False, fancy=False):
        self._commands = []
        self._prefix = ""
        self._error = Unset
        self._suggester = Unset
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

        self.use_prefix(prefix)
        if error is not Unset:
            self.on_error(error)
        self.use_suggester(coalesce(suggester, AffixSuggester()))

    @classmethod
    def create(cls, *args, **kwargs):
        return cls(*args, **kwargs)

    @property
    def commands(self):
        return tuple(self._commands)

    @property
    def prefix(self):
        return self._prefix

    def use_prefix(self, prefix, /):
        if not isinstance(prefix, str):
            raise TypeError("registry 'prefix' must be a string")
        self._prefix = prefix.strip()
        return self

    def use_suggester(self, suggester, /):
        if not callable(suggester):
            raise TypeError("registry 'suggester' must be callable")
        self._suggester = suggester
        return self

    def on_error(self, callback, /):
        """
        Set the error sink; usable as a decorator.
        """
        if not callable(callback):
            raise TypeError("registry error sink must be callable")
        self._error = callback
        return callback

    def add_command(self, command, /):
        """
        Register a command after re-validating its whole grammar.
        """
        if not isinstance(command, Command):
            raise TypeError("registry can only hold commands")
        command.validate()
        self._commands.append(command)
        logger.debug("registered %r with aliases %r", command.name, command.aliases)
        return command

    def add_commands(self, *commands):
        for item in commands:
            self.add_command(item)
        return self

    def command(self, name, /, *aliases, **metadata):
        """
        Decorator: build a Command around the function and register it.
        """
        wrapper = command(name, *aliases, **metadata)

        @rename("command")
        def register(action, /):
            return self.add_command(wrapper(action))

        return register

    def resolve(self, alias, /):
        """
        First command owning alias (case-insensitive), or None.
        """
        alias = alias.lower()
        for item in self._commands:
            if alias in item.aliases:
                return item
        return None

    def suggest(self, input, /):
        return list(self._suggester(input, self.commands))

    def trigger(self, fault, /):
        _trigger(fault, sink=self._error, colorful=self._colorful, fancy=self._fancy)

    def parse(self, line, /, access_level=0):
        """
        Handle one input line.

        Returns
        - False when the line is empty or does not start with the prefix, so the
          caller may treat it as something else (e.g. a chat message).
        - True otherwise, whether the command ran or a fault was reported.
        """
        if not isinstance(line, str):
            raise TypeError("parse() argument must be a string")
        if not (line := line.strip()):
            return False
        if self._prefix:
            if not line.lower().startswith(self._prefix.lower()):
                return False
            line = line[len(self._prefix):]

        tokens = tokenize(line)
        if not tokens:
            return False

        alias, *tokens = tokens
        if (found := self.resolve(alias)) is None:
            logger.debug("no command for alias %r", alias)
            self.trigger(CommandNotFoundError(f"Command '{alias}' not found.", input=alias))
            if suggestions := self.suggest(alias):
                self.trigger(RelatedCommandsHint(
                    f"Did you mean: {disjoin(f"'{suggestion}'" for suggestion in suggestions)}?",
                    input=alias,
                    suggestions=tuple(suggestions),
                ))
            return True

        try:
            if found.access_level > access_level:
                raise PermissionDeniedError(
                    f"Command '{found.name}' requires permission level {found.access_level}. "
                    f"(Currently only {access_level})",
                    command=found,
                    access_level=access_level,
                )
            if (message := found.check()) is not None:
                raise PreconditionFailedError(message, command=found)

            bindings = match(found, tokens, alias=alias.lower(), prefix=self._prefix)
            logger.debug("executing %r with %r", found.name, bindings)
            found.execute(bindings, checked=True)
        except ParseError as fault:
            logger.debug("parse of %r failed: %s", line, fault)
            self.trigger(fault)
        finally:
            found.reset()
        return True

    def usage(self, command, /):
        return command.usage(prefix=self._prefix)

    def help(self, access_level=Unset):
        """
        Help lines of the commands visible at access_level (all when unset).
        """
        return [
            item.help(prefix=self._prefix)
            for item in self._commands
            if access_level is Unset or item.access_level <= access_level
        ]

    def table(self, access_level=Unset):
        """
        rich Table of the commands visible at access_level (all when unset).
        """
        table = Table(title="Commands", title_justify="left")
        table.add_column("Name", style="bold")
        table.add_column("Aliases")
        table.add_column("Usage")
        table.add_column("Description")
        for item in self._commands:
            if access_level is Unset or item.access_level <= access_level:
                table.add_row(Text(item.name), Text(", ".join(item.aliases)), Text(self.usage(item)), Text(item.description))
        return table

    def __repr__(self):
        return f"registry(prefix={self._prefix!r}, commands={self.commands!r})"

    def __rich_repr__(self):
        yield "prefix", self._prefix
        yield "commands", self.commands


__all__ = (
    "Registry",
)
