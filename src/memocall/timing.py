"""
Decorators that move calls in time: `delay`, `debounce` and `throttle`.

Intervals are in seconds. Scheduled calls run on a `threading.Timer`
thread, so their return values are dropped and their exceptions go to
`threading.excepthook` rather than to the caller.
"""
import logging
from threading import Lock, RLock, Timer

from decorator import decorate

__all__ = ['delay', 'debounce', 'throttle']

logger = logging.getLogger(__name__)


def _check_interval(seconds):
    if seconds < 0:
        raise ValueError("Interval must be >= 0, got {}".format(seconds))


def delay(func, seconds):
    """
    Delay each call to `func` by `seconds`::

        show_later = delay(show, 1.5)
        show_later("test") # show("test") runs 1.5s later

    Each call returns the started `threading.Timer`, which can be
    cancelled or joined.
    """
    _check_interval(seconds)

    def schedule(func, *args, **kwargs):
        timer = Timer(seconds, func, args, kwargs)
        timer.start()
        logger.debug("Delayed %s by %ss", func.__name__, seconds)
        return timer

    return decorate(func, schedule)


def debounce(func, seconds):
    """
    Suspend calls to `func` until there have been `seconds` of inactivity,
    then call it once with the latest arguments. Calls made meanwhile are
    dropped::

        save = debounce(save_document, 1)
        save("a")
        save("b") # within 1s: only save_document("b") runs

    Each call returns the `threading.Timer` of the call it scheduled.
    `cancel()` on the wrapper drops the pending call.
    """
    _check_interval(seconds)
    lock = Lock()
    pending = None

    def cancel():
        nonlocal pending
        with lock:
            if pending is not None:
                pending.cancel()
                logger.debug("Dropped pending call to %s", func.__name__)
            pending = None

    def reschedule(func, *args, **kwargs):
        nonlocal pending
        timer = Timer(seconds, func, args, kwargs)
        with lock:
            if pending is not None:
                pending.cancel()
            pending = timer
            timer.start()
        return timer

    wrapper = decorate(func, reschedule)
    wrapper.cancel = cancel
    return wrapper


def throttle(func, seconds):
    """
    Pass calls to `func` at most once per `seconds`::

        update = throttle(show, 1)
        update(1) # show(1)
        update(2) # throttled
        update(3) # throttled
        # 1s later, show(3). show(2) never runs.

    The first call runs right away and returns the result of `func`. Calls
    during the following interval return None; the latest of them is saved
    and run when the interval ends, which starts a new interval. `cancel()`
    on the wrapper drops a saved call and ends the current interval.
    """
    _check_interval(seconds)
    lock = RLock()
    timer = None
    saved = None

    def release():
        nonlocal timer, saved
        with lock:
            timer = None
            call, saved = saved, None
        if call is not None:
            args, kwargs = call
            wrapper(*args, **kwargs)

    def cancel():
        nonlocal timer, saved
        with lock:
            if timer is not None:
                timer.cancel()
            timer = None
            saved = None

    def run(func, *args, **kwargs):
        nonlocal timer, saved
        with lock:
            if timer is not None:
                saved = (args, kwargs)
                logger.debug("Throttled call to %s", func.__name__)
                return None
            timer = Timer(seconds, release)
            timer.start()
        return func(*args, **kwargs)

    wrapper = decorate(func, run)
    wrapper.cancel = cancel
    return wrapper
