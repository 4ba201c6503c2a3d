"""Various utilities that are needed by the disposal functions."""

__all__ = ("nop",)


def nop(*args, **kwds) -> None:
    """Dummy function that can be invoked with arbitrary arguments and that
    does nothing.
    """
    pass
