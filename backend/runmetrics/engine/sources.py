from typing import Optional, TypeVar

T = TypeVar("T")


def first_present(*candidates: Optional[T], default: Optional[T] = None) -> Optional[T]:
    """Return the first candidate that is not None, else default.

    Candidates are listed in priority order, e.g.
    first_present(summary_distance, live_distance, default=0.0).
    """
    for value in candidates:
        if value is not None:
            return value
    return default
