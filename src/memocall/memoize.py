"""
Implements naive unbounded memoization.

Unlike `functools.lru_cache`, the key function is pluggable, there is no
size bound, and a memoized method can be given its call-context (`self`)
without the context becoming part of the key.
"""
import logging
from contextlib import nullcontext
from functools import update_wrapper
from threading import RLock

from .keys import args_key

__all__ = ['Memoize', 'memoize']

logger = logging.getLogger(__name__)


class Memoize(dict):
    """
    Memoize a function based on a key derived from the arguments passed
    in. Example::

        @Memoize
        def square(x): return x * x

    Memoize is a dict of key -> result, so you can inspect, delete or
    clear memoized values like you would with any dict. With the default
    key the dict keys are argument tuples, so `square(4)` is stored under
    `(4,)`, not `4`. Equality and hashing are by identity, not by cache
    contents.

    The function runs at most once per key for the lifetime of the
    instance. If it raises, nothing is stored and the next call with the
    same key runs it again. Entries are never evicted.

    Defined in a class body, Memoize is a method: the instance is the
    call-context and never part of the key, whether it is called as
    `box.plus(1)` or `Box.plus(box, 1)`.

    Arguments:
    f: the function to memoize

    Keyword arguments:
    key: derive a cache key from the call arguments. Receives the same
      arguments as `f`, minus the call-context. Defaults to `args_key`.
    lock: guard check-compute-store with a lock so concurrent first calls
      with the same key run `f` once.
    """
    def __init__(self, f, key=None, lock=False):
        super().__init__()
        if key is not None and not callable(key):
            raise ValueError("key must be callable, got {!r}".format(key))
        update_wrapper(self, f)
        self.function = f
        self.key = key or args_key
        self.__lock = RLock() if lock else None
        self.__name = getattr(f, "__qualname__", None) or repr(f)
        self.__is_method = False

    # Two memoized functions are never equal, even with the same entries.
    __eq__ = object.__eq__
    __ne__ = object.__ne__
    __hash__ = object.__hash__

    def __set_name__(self, owner, name):
        self.__is_method = True

    def __call__(self, *args, **kwargs):
        if self.__is_method and args:
            return self.apply(args[0], args[1:], kwargs)
        return self.apply(None, args, kwargs)

    def __get__(self, obj, objtype=None):
        """Bind to `obj` so that it is forwarded as the call-context."""
        if obj is None:
            return self
        def bound(*args, **kwargs):
            return self.apply(obj, args, kwargs)
        update_wrapper(bound, self.function)
        bound.memo = self
        return bound

    def apply(self, context, args, kwargs=None):
        """
        Call the memoized function with an explicit call-context.

        If `context` is not None it is passed as the first positional
        argument, the way Python passes `self` to a method. The context is
        not part of the key: results are cached per argument list only, so
        `f` must not depend on context state that changes between calls.
        """
        kwargs = kwargs or {}
        key = self.key(*args, **kwargs)
        with self.__lock or nullcontext():
            if key in self:
                return self[key]
            logger.debug("%s: computing %r", self.__name, key)
            call_args = args if context is None else (context,) + tuple(args)
            try:
                result = self.function(*call_args, **kwargs)
            except Exception:
                logger.debug(
                    "%s: computation for %r failed, not cached",
                    self.__name, key
                )
                raise
            self[key] = result
            return result

    def invalidate(self, *args, **kwargs):
        """Invalidate the memoized value for a set of arguments."""
        del self[self.key(*args, **kwargs)]
        return self

    def __repr__(self):
        return "<Memoize {} ({} cached)>".format(self.__name, len(self))


def memoize(f=None, key=None, lock=False):
    """
    Memoize a function. Usable bare or with options::

        @memoize
        def foo(x, y): return x + y

        @memoize(key=lambda x, y: "{},{}".format(x, y))
        def bar(x, y): return x + y

        foo(1, 2) # 3
        dict(foo) # {(1, 2): 3}

    The default key is the tuple of arguments, even for a single
    argument: `square(4)` is cached under `(4,)`. Pass
    `key=first_arg_key` to cache under the argument itself.

    You can invalidate a single result, or all of them::

        foo.invalidate(1, 2)
        foo.clear()

    See `Memoize` for the keyword arguments.
    """
    if f is None:
        def decorate(f):
            return Memoize(f, key=key, lock=lock)
        return decorate
    return Memoize(f, key=key, lock=lock)
