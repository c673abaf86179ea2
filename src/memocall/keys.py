"""
Key functions for `Memoize`.

A key function takes the same arguments as the memoized function and
returns a hashable value. Calls that should share a cached result must
produce equal keys. Nothing checks that: a key function that maps two
different argument lists to the same key will serve one call's result to
the other.
"""
from collections.abc import Mapping, Set
from functools import singledispatch

__all__ = ['args_key', 'frozen_key', 'freeze', 'first_arg_key', 'joined_key']

# Separates positional from keyword arguments in a key tuple. Never equal
# to an argument.
_KWARGS_MARK = object()


def args_key(*args, **kwargs):
    """
    The default key: the tuple of positional arguments, followed by the
    keyword arguments sorted by name::

        args_key(1, 2) # (1, 2)
        args_key(4) # (4,)

    Keys are compared by value, so `f(3, 5)` and `f(5, 3)` get separate
    entries, and every argument must be hashable.
    """
    if kwargs:
        return args + (_KWARGS_MARK,) + tuple(sorted(kwargs.items()))
    return args


@singledispatch
def freeze(value):
    """
    Return a hashable structural copy of `value`. Containers freeze to a
    `(kind, items)` pair, so a dict, a set of pairs, a list and a tuple
    holding the same items all freeze differently::

        freeze({1: 2}) # ("mapping", frozenset({(1, 2)}))
        freeze([1, 2]) # ("list", (1, 2))

    Values that are not containers are returned unchanged.
    """
    return value


@freeze.register(Mapping)
def _freeze_mapping(value):
    items = frozenset((freeze(k), freeze(v)) for k, v in value.items())
    return ("mapping", items)


@freeze.register(Set)
def _freeze_set(value):
    return ("set", frozenset(freeze(item) for item in value))


@freeze.register(list)
def _freeze_list(value):
    return ("list", tuple(freeze(item) for item in value))


@freeze.register(tuple)
def _freeze_tuple(value):
    return ("tuple", tuple(freeze(item) for item in value))


def frozen_key(*args, **kwargs):
    """
    Like `args_key`, but freezes every argument first, so functions taking
    lists or dicts can be memoized::

        @memoize(key=frozen_key)
        def total(prices): return sum(prices)

        total([1, 2, 3])
    """
    return args_key(
        *(freeze(arg) for arg in args),
        **{name: freeze(value) for name, value in kwargs.items()}
    )


def first_arg_key(arg, *args, **kwargs):
    """Key by the first positional argument only. Other arguments are ignored."""
    return arg


def joined_key(sep=","):
    """
    Returns a key function which joins the string form of the positional
    arguments with `sep`::

        @memoize(key=joined_key())
        def add(a, b): return a + b

        add(3, 5) # cached under "3,5"

    Cheap, but arguments whose string form contains `sep` collide
    (`("1,2", 3)` and `(1, "2,3")` both give "1,2,3"), and so do arguments
    that print the same (`1` and `"1"`). Keyword arguments are not
    accepted.
    """
    def key(*args):
        return sep.join(str(arg) for arg in args)
    return key
