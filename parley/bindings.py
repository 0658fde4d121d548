"""
Parley bindings: the values an action receives.

Bindings is an immutable snapshot taken right after a successful match, before
the grammar is reset. Keys are argument paths (tuples of names from the
command's root, enum options included), in bind order:

    >>> bindings[("type",)]
    'send'
    >>> bindings[("type", "send", "user")]
    'bob'

Bare names are looked up case-insensitively, bound arguments first, then every
descendant of a bound argument, then the rest of the command's grammar.
Arguments the parse never reached hold their default (or ""):

    >>> bindings["user"]
    'bob'

Iteration and len() only cover the bound paths; membership tests and get()
follow the lookup rules above.
"""
from collections.abc import Mapping
from types import MappingProxyType


class Bindings(Mapping):
    """
    Read-only mapping of argument paths to bound values.

    Parameters
    - bound: Iterable[tuple[tuple[str, ...], Argument]]
      The (path, argument) pairs in the order the matcher bound them.
    - grammar: Iterable[Argument]
      The command's root arguments; their subtrees are snapshotted after the
      descendants of the bound arguments.
    """
    __slots__ = ("_values", "_descendants", "_arguments")

    def __init__(self, bound=(), /, grammar=()):
        values = {}
        descendants = {}
        arguments = []

        def walk(path, argument):
            for child in argument.arguments:
                descendants.setdefault(path + (child.name,), child.value)
                walk(path + (child.name,), child)

        bound = [(tuple(path), argument) for path, argument in bound]
        for path, argument in bound:
            values[path] = argument.value
            arguments.append(argument)
        for path, argument in bound:
            walk(path, argument)
        for argument in grammar:
            descendants.setdefault((argument.name,), argument.value)
            walk((argument.name,), argument)

        self._values = MappingProxyType(values)
        self._descendants = MappingProxyType({
            path: value for path, value in descendants.items() if path not in values
        })
        self._arguments = tuple(arguments)

    @property
    def arguments(self):
        """
        The bound Argument nodes, in bind order.

        Their value slots are reset once the action returns; read values from
        the mapping instead.
        """
        return self._arguments

    def __getitem__(self, key, /):
        if isinstance(key, tuple):
            if key in self._values:
                return self._values[key]
            if key in self._descendants:
                return self._descendants[key]
            raise KeyError(key)
        if isinstance(key, str):
            name = key.casefold()
            for table in (self._values, self._descendants):
                for path, value in table.items():
                    if path and path[-1].casefold() == name:
                        return value
            raise KeyError(key)
        raise TypeError(f"bindings keys must be strings or paths, not {type(key).__name__}")

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"bindings({", ".join(f"{"/".join(path)}={value!r}" for path, value in self._values.items())})"

    def __rich_repr__(self):
        for path, value in self._values.items():
            yield "/".join(path), value


__all__ = (
    "Bindings",
)
