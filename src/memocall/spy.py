"""
Record calls to a function.
"""
from collections import namedtuple

from decorator import decorate

__all__ = ['Call', 'spy']

Call = namedtuple('Call', ['args', 'kwargs'])


def spy(func):
    """
    Wrap `func` so that every call is saved in the wrapper's `calls`
    list before being passed on. Example::

        @spy
        def work(a, b): return a + b

        work(1, 2)
        work(4, 5)
        [call.args for call in work.calls] # [(1, 2), (4, 5)]

    The wrapper keeps the signature of `func`, so arguments are recorded
    the way they bind to it: defaults are filled in and arguments passed
    by name are recorded positionally where they can be. A call is
    recorded even if `func` raises.

    Spying on a method records the instance as the first argument.
    """
    calls = []

    def record(func, *args, **kwargs):
        calls.append(Call(args, kwargs))
        return func(*args, **kwargs)

    wrapper = decorate(func, record)
    wrapper.calls = calls
    return wrapper
