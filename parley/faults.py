"""
Parley faults (configuration errors, parse faults) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing parse
  faults. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- StructuralConfigurationError and its subclasses: raised synchronously by the
  builder call that broke a grammar invariant (ordering, default placement,
  names). They never happen mid-parse.
- ParseError and its subclasses: carry a message + read-only options and know
  how to render themselves (rich) or hand themselves to an error sink.
- trigger(): central entry point to surface any fault.

Integration
- The registry catches ParseError during a parse and calls trigger(fault, **ctx).
- With a sink configured, the sink receives the fault (str(fault) is the message);
  without one, the fault is printed to stderr via rich.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND, RELATED_COMMANDS
    - gates (1111x)
      • PERMISSION_DENIED, PRECONDITION_FAILED
    - arguments (1112x)
      • MISSING_ARGUMENT, UNRECOGNIZED_OPTION, INVALID_ARGUMENT

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- routing (11xxx) ---
    UNKNOWN_COMMAND             = 11101
    RELATED_COMMANDS            = 11102

    # --- gates (11xxx) ---
    PERMISSION_DENIED           = 11111
    PRECONDITION_FAILED         = 11112

    # --- arguments (11xxx) ---
    MISSING_ARGUMENT            = 11121
    UNRECOGNIZED_OPTION         = 11122
    INVALID_ARGUMENT            = 11123

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class StructuralConfigurationError(Exception):
    """
    base of every grammar/registration error.

    raised by the builder call that violated an invariant, before any parsing
    happens; these are not recoverable and are never reported through a sink.
    """


class InvalidNameError(StructuralConfigurationError, ValueError): ...
class OrderingViolationError(StructuralConfigurationError, ValueError): ...
class InvalidValueError(StructuralConfigurationError, ValueError): ...
class MalformedGrammarError(StructuralConfigurationError, ValueError): ...
class InvalidStateError(StructuralConfigurationError, RuntimeError): ...


class ParseError(Exception):
    """
    a user-facing fault raised while handling one input line.

    the message is the complete, human-readable sentence (str(fault) returns it);
    options hold structured context (input, command, argument, usage, hint, ...)
    and runtime rendering flags (sink, colorful, fancy) merged in by trigger().
    """
    code = Unset
    title = "parse error"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", "parley"), styler("prog-name"))
        code = self.options.get("code", type(self).code)
        title = self.options.get("title", type(self).title)

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "", styler("code")),
            " | ",
            text(title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renderables = [message]
        if hint := self.options.get("hint"):
            renderables.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renderables), title=header, title_align="left")

        return Group(header, *renderables)

    def __trigger__(self) -> None:
        sink = self.options.get("sink", Unset)
        if sink is Unset or sink is None:
            console.print(self)
            return
        sink(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandNotFoundError(ParseError):
    code = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"


class RelatedCommandsHint(ParseError):
    code = FaultCode.RELATED_COMMANDS
    title = "did you mean"


class PermissionDeniedError(ParseError):
    code = FaultCode.PERMISSION_DENIED
    title = "permission denied"


class PreconditionFailedError(ParseError):
    code = FaultCode.PRECONDITION_FAILED
    title = "precondition failed"


class MissingRequiredArgumentError(ParseError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"


class UnrecognizedEnumValueError(ParseError):
    code = FaultCode.UNRECOGNIZED_OPTION
    title = "unrecognized option"


class ArgumentValidationFailedError(ParseError):
    code = FaultCode.INVALID_ARGUMENT
    title = "invalid argument"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - typical options: sink, colorful, fancy, hint, and any other context
      the reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "StructuralConfigurationError",
    "InvalidNameError",
    "OrderingViolationError",
    "InvalidValueError",
    "MalformedGrammarError",
    "InvalidStateError",
    "ParseError",
    "CommandNotFoundError",
    "RelatedCommandsHint",
    "PermissionDeniedError",
    "PreconditionFailedError",
    "MissingRequiredArgumentError",
    "UnrecognizedEnumValueError",
    "ArgumentValidationFailedError",
    "trigger",
)
