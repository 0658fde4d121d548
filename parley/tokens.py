"""
Parley tokenizer.

Splits a trimmed line on runs of whitespace. A double-quoted span standing on
its own ("..." followed by whitespace or the end of the line) becomes a single
token with the quotes removed and its inner whitespace kept:

    >>> tokenize('mail send bob "see you tomorrow"')
    ['mail', 'send', 'bob', 'see you tomorrow']

Unterminated or embedded quotes are kept verbatim inside an ordinary token,
and there are no escape sequences:

    >>> tokenize('say "hello world')
    ['say', '"hello', 'world']
"""
import re

_TOKEN = re.compile(r'"([^"]*)"(?=\s|$)|(\S+)')


def tokenize(text, /):
    if not isinstance(text, str):
        raise TypeError("tokenize() argument must be a string")

    tokens = []
    for match in _TOKEN.finditer(text.strip()):
        quoted, bare = match.groups()
        tokens.append(quoted if quoted is not None else bare)
    return tokens


__all__ = (
    "tokenize",
)
