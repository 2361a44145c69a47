from collections import namedtuple

# Each window covers WINDOW_SPAN * skip consecutive samples.
WINDOW_SPAN = 4

Window = namedtuple("Window", ["start", "end"])


def effective_end(n: int, frames: int) -> int:
    """Frame cap applies only when it is set (>0) and shorter than the table."""
    if 0 < frames < n:
        return frames
    return n


def iter_windows(n: int, frames: int, skip: int):
    """
    Yield Window(start, end) for start = 0, skip, 2*skip, ...
    while start + 4*skip < effective end.

    This is a generator, so it is consumed once; build a new one to restart.
    Producing no windows at all is a valid outcome.
    """
    if skip <= 0:
        raise ValueError(f"skip must be positive, got {skip}")

    end_frame = effective_end(n, frames)
    width = WINDOW_SPAN * skip

    frame = 0
    while frame + width < end_frame:
        yield Window(frame, frame + width)
        frame += skip


def count_windows(n: int, frames: int, skip: int) -> int:
    if skip <= 0:
        raise ValueError(f"skip must be positive, got {skip}")

    span = effective_end(n, frames) - WINDOW_SPAN * skip
    if span <= 0:
        return 0
    # last start s satisfies s + width < end, i.e. s <= span - 1
    return (span - 1) // skip + 1
