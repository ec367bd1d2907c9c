import functools
import logging


def log_call(fn):
    @functools.wraps(fn)
    def __wrapped(*args, **kwargs):
        logging.getLogger(fn.__module__.split(".")[-1]).debug(f"Calling {fn.__qualname__} {args[1:]} {kwargs}")
        return fn(*args, **kwargs)
    return __wrapped
