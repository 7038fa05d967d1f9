from __future__ import annotations


class MahjongError(Exception):
    """Base class for errors raised by the hand engine."""


class InvalidHand(MahjongError):
    pass


class InvalidContext(MahjongError):
    pass


class IncompleteHand(MahjongError):
    def __init__(self, message: str, shanten: int | None = None) -> None:
        super().__init__(message)
        self.shanten = shanten


class NoYaku(MahjongError):
    pass
