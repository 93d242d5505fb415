"""ASCII rendering of circuits.

Every gate contributes one column. A column is a list of three-line strips, one
per wire (qubits first, then classic bits), all of the same width. The circuit
drawing is the left-to-right concatenation of the columns, prefixed with wire
labels:

         +---+
    q0: -| H |---*---
         +---+   |
               +-+-+
    q1: -------| X |-
               +---+
"""
from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

if TYPE_CHECKING:
    from .quantum import Circuit

Strip = Tuple[str, str, str]
Drawings = List[Strip]

QUBIT_WIRE = "-"
CLASSIC_WIRE = "="
GATE_SPACING = 1


class DrawingColumn:
    """Collects the boxes, markers and vertical links of a single gate column.

    Wires are numbered the way the rendered rows are: qubit ``i`` is wire ``i``,
    classic bit ``j`` is wire ``qubit_count + j``.
    """
    def __init__(self, qubit_count: int, classic_bit_count: int):
        self.qubit_count = qubit_count
        self.classic_bit_count = classic_bit_count
        self.boxes: Dict[int, str] = {}
        self.markers: Dict[int, str] = {}
        self.links: List[Tuple[int, int]] = []

    @property
    def wire_count(self) -> int:
        return self.qubit_count + self.classic_bit_count

    def qubit_wire(self, qubit_index: int) -> int:
        return qubit_index

    def classic_wire(self, classic_bit_index: int) -> int:
        return self.qubit_count + classic_bit_index

    def is_classic(self, wire: int) -> bool:
        return wire >= self.qubit_count

    def box(self, wire: int, label: str) -> None:
        self.boxes[wire] = label

    def marker(self, wire: int, symbol: str) -> None:
        self.markers[wire] = symbol

    def link(self, wires: Sequence[int]) -> None:
        """Draw a vertical line covering every wire between the lowest and highest of ``wires``."""
        wires = list(wires)
        if len(wires) > 1 and min(wires) != max(wires):
            self.links.append((min(wires), max(wires)))

    def width(self) -> int:
        width = 3
        for label in self.boxes.values():
            width = max(width, len(label) + 4)
        for symbol in self.markers.values():
            width = max(width, len(symbol) + 2)
        # odd widths keep the vertical line centred
        return width if width % 2 else width + 1

    def _linked_up(self, wire: int) -> bool:
        return any(low < wire <= high for low, high in self.links)

    def _linked_down(self, wire: int) -> bool:
        return any(low <= wire < high for low, high in self.links)

    def _strip(self, wire: int, width: int) -> Strip:
        wire_char = CLASSIC_WIRE if self.is_classic(wire) else QUBIT_WIRE
        centre = width // 2
        up, down = self._linked_up(wire), self._linked_down(wire)

        if wire in self.boxes:
            label = self.boxes[wire]
            inner = len(label) + 2
            border = "+" + "-" * inner + "+"
            top = _put(border, (len(border) // 2), "+") if up else border
            bottom = _put(border, (len(border) // 2), "+") if down else border
            middle = "| " + label + " |"
            left = (width - len(border)) // 2
            right = width - len(border) - left
            return (
                " " * left + top + " " * right,
                wire_char * left + middle + wire_char * right,
                " " * left + bottom + " " * right,
            )

        top = _put(" " * width, centre, "|") if up else " " * width
        bottom = _put(" " * width, centre, "|") if down else " " * width
        if wire in self.markers:
            symbol = self.markers[wire]
            start = centre - len(symbol) // 2
            middle = wire_char * start + symbol + wire_char * (width - start - len(symbol))
        elif up and down:
            middle = _put(wire_char * width, centre, "|")
        else:
            middle = wire_char * width
        return top, middle, bottom

    def render(self) -> Drawings:
        width = self.width()
        return [self._strip(wire, width) for wire in range(self.wire_count)]


def _put(text: str, position: int, char: str) -> str:
    return text[:position] + char + text[position + 1:]


def empty_strip(width: int, classic: bool = False) -> Strip:
    wire_char = CLASSIC_WIRE if classic else QUBIT_WIRE
    return " " * width, wire_char * width, " " * width


def wire_labels(qubit_count: int, classic_bit_count: int) -> List[str]:
    labels = [f"q{index}: " for index in range(qubit_count)]
    labels += [f"c{index}: " for index in range(classic_bit_count)]
    width = max((len(label) for label in labels), default=0)
    return [label.rjust(width) for label in labels]


def draw_circuit(circuit: "Circuit") -> str:
    """Render every gate of ``circuit`` as an ASCII diagram."""
    qubit_count, classic_bit_count = circuit.qubit_count, circuit.classic_bit_count
    labels = wire_labels(qubit_count, classic_bit_count)
    rows = [[" " * len(label), label, " " * len(label)] for label in labels]

    def append(strips: Drawings) -> None:
        for wire, strip in enumerate(strips):
            for line in range(3):
                rows[wire][line] += strip[line]

    def spacer() -> Drawings:
        return [empty_strip(GATE_SPACING, classic=wire >= qubit_count) for wire in range(len(rows))]

    append(spacer())
    for gate in circuit.gates:
        append(gate.get_drawings(circuit))
        append(spacer())

    lines = []
    for row in rows:
        lines.extend(line.rstrip() if index != 1 else line for index, line in enumerate(row))
    return "\n".join(lines)
