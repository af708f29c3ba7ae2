"""A bounded memory of visited points, used to skip uninteresting local searches."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from dockcore.conf import Change, Conf

_FAR_DISTANCE = 1e10
_CAPACITY_FACTOR = 10
_CHECK_FACTOR = 2


class Element:
    """A visited point: its variables, function value and derivative signs."""

    __slots__ = ("x", "f", "d_zero", "d_positive")

    def __init__(self, x: Sequence[float], f: float, d: Sequence[float]) -> None:
        self.x = list(x)
        self.f = f
        # Bit i of d_zero is set where the i-th derivative is zero,
        # bit i of d_positive where it is positive.
        self.d_zero = 0
        self.d_positive = 0
        for i, di in enumerate(d):
            if di == 0:
                self.d_zero |= 1 << i
            elif di > 0:
                self.d_positive |= 1 << i

    def __len__(self) -> int:
        return len(self.x)

    def __repr__(self) -> str:
        return (
            f"Element(x={self.x!r}, f={self.f!r}, "
            f"d_zero={self.d_zero}, d_positive={self.d_positive})"
        )

    def dist2(self, now: Sequence[float]) -> float:
        """Squared Euclidean distance to ``now``."""
        return sum((a - b) * (a - b) for a, b in zip(self.x, now))

    def check(
        self, now_x: Sequence[float], now_f: float, now_d: Sequence[float]
    ) -> bool:
        """True unless some variable with a same-signed derivative contradicts it."""
        new_y_bigger = now_f - self.f > 0
        for i, di in enumerate(now_d):
            bit = 1 << i
            if self.d_zero & bit or di == 0:
                continue
            now_positive = di > 0
            if now_positive != bool(self.d_positive & bit):
                continue
            new_x_bigger = now_x[i] - self.x[i] > 0
            if now_positive:
                consistent = new_x_bigger != new_y_bigger
            else:
                consistent = new_x_bigger == new_y_bigger
            if not consistent:
                return False
        return True


class Visited:
    """A ring buffer of visited points holding ten per variable once full."""

    def __init__(self) -> None:
        self._items: list[Element] = []
        self.n_variable = 0
        self.full = False
        self._next = 0

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Element:
        return self._items[index]

    def add(self, conf: Conf, f: float, change: Change) -> None:
        """Record a point; raises ValueError if its size differs from earlier ones."""
        x = conf.values()
        d = change.values()
        if not self._items:
            self.n_variable = len(x)
        elif len(x) != self.n_variable:
            raise ValueError("local search designing variables not the same")
        element = Element(x, f, d)
        if not self.full:
            self._items.append(element)
            if len(self._items) >= _CAPACITY_FACTOR * self.n_variable:
                self.full = True
                self._next = 0
        else:
            self._items[self._next] = element
            self._next = (self._next + 1) % len(self._items)

    def interesting(self, conf: Conf, f: float, change: Change) -> bool:
        """Whether a local search from this point is worth doing."""
        if not self._items or not self.full:
            return True
        x = conf.values()
        d = change.values()
        distances = [element.dist2(x) for element in self._items]
        candidates = [
            i
            for i in sorted(range(len(distances)), key=distances.__getitem__)
            if distances[i] < _FAR_DISTANCE
        ]
        picked = 0
        flag = False
        for step in range(_CHECK_FACTOR * self.n_variable):
            if step < len(candidates):
                picked = candidates[step]
            flag = self._items[picked].check(x, f, d)
            if flag:
                break
        return flag