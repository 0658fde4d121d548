"""
Parley usage and help rendering.

Renders a grammar back to bracket notation:

    <required> [optional] [read|clear|send <user> <message>]

- Names are lower-cased, otherwise written as declared, so a rendered usage
  can be read back with infer().
- Nested children are written inside their parent's brackets, after its name
  (or, for an enum, after the option that owns them).

The same strings feed the "Usage: ..." clause of argument faults, Command.usage
and Command.help.
"""
from .utils import *


def _bracket(argument, interior):
    return f"[{interior}]" if argument.optional else f"<{interior}>"


def _label(argument):
    return argument.name.lower()


def render(arguments, /):
    """
    Render a sibling list (depth-first, space-separated).
    """
    fragments = []
    for argument in arguments:
        if argument.enum:
            options = []
            for option in argument.arguments:
                if option.arguments:
                    options.append(f"{_label(option)} {render(option.arguments)}")
                else:
                    options.append(_label(option))
            fragments.append(_bracket(argument, "|".join(options)))
        elif argument.arguments:
            fragments.append(_bracket(argument, f"{_label(argument)} {render(argument.arguments)}"))
        else:
            fragments.append(_bracket(argument, _label(argument)))
    return " ".join(fragments)


def enumerate_options(argument, /):
    """
    Quoted, human-readable list of the legal values of an enum argument.

    Example
    - "'read', 'clear' (default), or 'send'"
    """
    if not argument.enum:
        raise ValueError(f"argument {argument.name!r} is not an enum")

    default = coalesce(argument.default, "") or ""
    return disjoin(
        f"'{option.name}' (default)" if default and option.name.casefold() == default.casefold() else f"'{option.name}'"
        for option in argument.arguments
    )


def generate(command, /, alias=Unset, prefix=""):
    """
    Usage line of a command: prefix, alias (or the given override) and grammar.

    Returns "" when the command has no alias to show.
    """
    if not command.aliases:
        return ""
    head = prefix + (coalesce(alias, "") or command.aliases[0])
    if not command.arguments:
        return head
    return f"{head} {render(command.arguments)}"


def describe(command, /, alias=Unset, prefix=""):
    """
    One-line help: "Name: description (Usage: ...)".
    """
    head = command.name
    if command.description:
        head += f": {command.description}"
    return f"{head} (Usage: {generate(command, alias, prefix)})"


__all__ = (
    "render",
    "enumerate_options",
    "generate",
    "describe",
)
