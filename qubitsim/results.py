import os
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import matplotlib.pyplot as mpl
from attrs import frozen, field

from .simulation.classic_bit import ClassicBit
from .log import get_logger

logger = get_logger(__name__)


def _to_bits(bits: Iterable) -> Tuple[int, ...]:
    return tuple(int(bit) for bit in bits)


@frozen
class Result:
    """Classic bits left behind by one run of a circuit.

    ``bits[i]`` is classic bit ``i``. The string form puts the highest index
    first, so bits ``(1, 0)`` read ``"01"``.
    """
    bits: Tuple[int, ...] = field(converter=_to_bits)

    @classmethod
    def from_classic_bits(cls, classic_bits: Sequence[ClassicBit]) -> "Result":
        return cls(int(bit) for bit in classic_bits)

    def binary(self) -> str:
        return "".join(str(bit) for bit in reversed(self.bits))

    def to_int(self) -> int:
        return int(self.binary(), 2) if self.bits else 0

    def __len__(self) -> int:
        return len(self.bits)

    def __str__(self) -> str:
        return self.binary()


class CompoundResult:
    """Histogram of outcomes over many runs, keyed by the outcome bit string."""
    def __init__(self, results: Optional[Iterable[Result]] = None):
        self._counts: Counter = Counter()
        for result in results or ():
            self.add_result(result)

    def add_result(self, result: Result) -> None:
        self._counts[str(result)] += 1

    @property
    def counts(self) -> Dict[str, int]:
        return dict(self._counts)

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def probabilities(self) -> Dict[str, float]:
        total = self.total
        if total == 0:
            return {}
        return {outcome: count / total for outcome, count in sorted(self._counts.items())}

    def most_common(self, n: Optional[int] = None) -> List[Tuple[str, int]]:
        return self._counts.most_common(n)

    def items(self):
        return sorted(self._counts.items())

    def __getitem__(self, outcome: str) -> int:
        return self._counts[outcome]

    def __contains__(self, outcome) -> bool:
        return outcome in self._counts

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._counts))

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other):
        if isinstance(other, CompoundResult):
            return self._counts == other._counts
        if isinstance(other, dict):
            return dict(self._counts) == other
        return NotImplemented

    def __str__(self) -> str:
        if not self._counts:
            return "{ }"
        body = ", ".join(f'"{outcome}": {count}' for outcome, count in self.items())
        return "{ " + body + " }"

    def __repr__(self) -> str:
        return f"<CompoundResult {len(self)} outcomes over {self.total} runs: {self}>"

    def publish_histogram(self, title=None, normalize=False, color='#3D89DE', ax=None, show=False, save=None):
        """Bar chart of the outcomes.

        Args:
            title (str or None): Axes title.
            normalize (bool): Plot frequencies instead of raw counts.
            color (str): Bar colour.
            ax (matplotlib Axes or None): Axes to draw on; a new figure is created otherwise.
            show (bool): Call ``pyplot.show()`` when done.
            save (str or None): Path of an image file to write.

        Returns:
            The Axes holding the chart.
        """
        if ax is None:
            _, ax = mpl.subplots()
        outcomes = list(self)
        values = self.probabilities() if normalize else self.counts
        heights = [values[outcome] for outcome in outcomes]
        ax.bar(outcomes, heights, color=color, edgecolor="#000000")
        ax.set_xlabel("Outcome")
        ax.set_ylabel("Frequency" if normalize else "Count")
        if title:
            ax.set_title(title)
        if save:
            directory = os.path.dirname(save)
            if directory:
                os.makedirs(directory, exist_ok=True)
            ax.figure.savefig(save)
            logger.debug(f"Saved histogram of {self.total} runs to {save}")
        if show:
            mpl.show()
        return ax
