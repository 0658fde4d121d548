"""
Parley recursive matcher.

match(command, tokens) binds the tokens that follow an alias to the command's
grammar and returns a Bindings snapshot, or raises the ParseError describing
the first problem found.

Algorithm (per sibling list, siblings visited in order, tokens consumed front
to back)
1. Trailing merge: the last sibling of a list, when it is neither an enum nor a
   parent, absorbs every remaining token (space-joined), so free text such as a
   chat message needs no quoting.
2. Out of tokens: an optional slot binds its default and ends the list; a
   required slot raises MissingRequiredArgumentError.
3. Enum slot: the token must name an option (case-insensitive). When it does
   not, a default naming an option is used instead and the token is left for
   the following siblings; without one, an optional slot that is not last ends
   the list, anything else raises UnrecognizedEnumValueError. A chosen option
   with children continues into them; the rest of the current list is skipped.
4. Any other slot: the token is validated and bound; a slot with children
   continues into them and the rest of the current list is skipped.

Tokens left over after the grammar is satisfied are ignored.
"""
import logging
from collections import deque

from .arguments import ArgumentKind
from .bindings import Bindings
from .faults import *
from .usage import enumerate_options, generate
from .utils import *

logger = logging.getLogger(__name__)


def _match(siblings, tokens, path, bound, usage):
    for index, argument in enumerate(siblings):
        last = index == len(siblings) - 1

        if last and argument.kind is not ArgumentKind.ENUM and not argument.arguments and len(tokens) > 1:
            merged = " ".join(tokens)
            tokens.clear()
            tokens.append(merged)

        if not tokens:
            if argument.optional:
                bound.append((path + (argument.name,), argument.bind("")))
                break
            if argument.kind is ArgumentKind.ENUM:
                required = enumerate_options(argument)
            else:
                required = f"'{argument.name}'"
            raise MissingRequiredArgumentError(
                f"Invalid arguments, {required} required. Usage: {usage}",
                argument=argument,
                usage=usage,
            )

        match argument.kind:
            case ArgumentKind.ENUM:
                option = argument.option(tokens[0])
                if option is None and argument.default and argument.option(argument.default) is not None:
                    logger.debug("%r does not name an option of %r, using default %r", tokens[0], argument.name, argument.default)
                    option = argument.option(argument.default)
                    tokens.appendleft(argument.default)
                if option is None:
                    if argument.optional and not last:
                        break
                    raise UnrecognizedEnumValueError(
                        f"Argument '{tokens[0].lower()}' not recognized. Must be {enumerate_options(argument)}",
                        argument=argument,
                        input=tokens[0],
                        usage=usage,
                    )
                tokens.popleft()
                bound.append((path + (argument.name,), argument._select(option)))
                if option.arguments:
                    return _match(option.arguments, tokens, path + (argument.name, option.name), bound, usage)

            case ArgumentKind.OPTIONAL | ArgumentKind.REQUIRED:
                bound.append((path + (argument.name,), argument.bind(tokens.popleft())))
                if argument.arguments:
                    return _match(argument.arguments, tokens, path + (argument.name,), bound, usage)


def match(command, tokens, /, *, alias=Unset, prefix=""):
    """
    Bind tokens (the input after the alias) to the command's arguments.

    alias and prefix only shape the "Usage: ..." clause of fault messages.

    Raises
    - MissingRequiredArgumentError, UnrecognizedEnumValueError,
      ArgumentValidationFailedError.
    """
    tokens = deque(tokens)
    bound = []
    usage = generate(command, alias, prefix)

    _match(command.arguments, tokens, (), bound, usage)
    if tokens:
        logger.debug("ignoring %d unmatched token(s) for %r: %r", len(tokens), command.name, list(tokens))
    return Bindings(bound, command.arguments)


__all__ = (
    "match",
)
