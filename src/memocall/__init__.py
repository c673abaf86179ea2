from .memoize import Memoize, memoize
from .keys import args_key, frozen_key, freeze, first_arg_key, joined_key
from .spy import Call, spy
from .timing import delay, debounce, throttle
