import enum

from attrs import define, field


class BitState(enum.IntEnum):
    ZERO = 0
    ONE = 1


def _to_bit_state(value) -> BitState:
    if isinstance(value, BitState):
        return value
    if isinstance(value, ClassicBit):
        return value.state
    if isinstance(value, bool):
        return BitState.ONE if value else BitState.ZERO
    if value in (0, 1):
        return BitState(int(value))
    raise ValueError(f"A classic bit can only hold 0 or 1, got {value!r}")


@define(eq=True)
class ClassicBit:
    """A single classical bit, ``0`` until something writes to it.

    Accepts a :class:`BitState`, a bool or the integers 0/1.
    """
    state: BitState = field(default=BitState.ZERO, converter=_to_bit_state)

    ZERO = BitState.ZERO
    ONE = BitState.ONE

    def set_state(self, state) -> None:
        self.state = _to_bit_state(state)

    def reset(self) -> None:
        self.state = BitState.ZERO

    def copy(self) -> "ClassicBit":
        return ClassicBit(self.state)

    def __bool__(self) -> bool:
        return self.state is BitState.ONE

    def __int__(self) -> int:
        return int(self.state)

    def __str__(self) -> str:
        return "1" if self.state is BitState.ONE else "0"
