"""
Parley "did you mean" suggestions.

A suggester is any callable (input, commands) -> list[str] returning related
aliases for an input that matched no command. The registry renders them as:

    Did you mean: 'ban', or 'banip'?

AffixSuggester is the default strategy: for each command, in registration
order, it keeps the first alias that looks related to the input by prefix,
suffix or outer characters.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class Suggester(Protocol):
    def __call__(self, input, commands, /): ...


class AffixSuggester:
    """
    Suggest at most one alias per command.

    An alias is related to the (lower-cased) input when it
    - starts with the input, or
    - starts with the input's first two characters (inputs of length >= 2), or
    - ends with the input's last two characters (inputs longer than 2), or
    - shares both the first and the last character with the input.
    """

    @staticmethod
    def related(alias, input, /):
        if not input:
            return False
        return (
            alias.startswith(input) or
            (len(input) >= 2 and alias.startswith(input[:2])) or
            (len(input) > 2 and alias.endswith(input[-2:])) or
            (alias.startswith(input[0]) and alias.endswith(input[-1]))
        )

    def __call__(self, input, commands, /):
        input = input.lower()
        suggestions = []
        for command in commands:
            for alias in command.aliases:
                if self.related(alias, input):
                    suggestions.append(alias)
                    break
        return suggestions

    def __repr__(self):
        return "affix-suggester()"


__all__ = (
    "Suggester",
    "AffixSuggester",
)
