"""Wall-clock timing for API handlers (the ``duration_s`` field of /convert and /parse)."""
from time import perf_counter
from typing import Any, Callable, Dict

DURATION_KEY = "duration_s"


def timed(func: Callable, *args: Any, **kwargs: Any) -> Dict[str, Any]:
    """Run *func* and add its run time in seconds, rounded to 0.1 ms, to the result.

    Only dict results (the translator's report dicts) are annotated; anything
    else is returned as is.
    """
    start = perf_counter()
    result = func(*args, **kwargs)
    if isinstance(result, dict):
        result[DURATION_KEY] = round(perf_counter() - start, 4)
    return result
