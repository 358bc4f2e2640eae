from typing import Iterator

from grammar import START, Symbol, augmented_production
from item import Item


class Column:
    """Duplicate-free, append-ordered set of items for one input position."""

    def __init__(self, index: int):
        self.index = index
        self.items: list[Item] = []
        self._seen: set[Item] = set()
        # key - symbol after the dot, value - items waiting on it
        self._waiting: dict[Symbol, list[Item]] = {}

    def add(self, item: Item) -> bool:
        if item in self._seen:
            return False
        self._seen.add(item)
        self.items.append(item)
        c = item.next_symbol()
        if c is not None:
            self._waiting.setdefault(c, []).append(item)
        return True

    def waiting_on(self, symbol: Symbol) -> list[Item]:
        return self._waiting.get(symbol, [])

    def __contains__(self, item: Item) -> bool:
        return item in self._seen

    def __getitem__(self, i: int) -> Item:
        return self.items[i]

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self):
        return f"Column({self.index}, {len(self)} items)"


class Chart:

    def __init__(self, n: int, start: str = START):
        self.start = augmented_production(start)
        self.columns = [Column(i) for i in range(n + 1)]
        self.columns[0].add(Item.from_production(self.start, origin=0))

    @property
    def final_item(self) -> Item:
        return Item.from_production(self.start, origin=0, dot_pos=1)

    def accepted(self) -> bool:
        return self.final_item in self.columns[-1]

    def __getitem__(self, i: int) -> Column:
        return self.columns[i]

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def __str__(self) -> str:
        lines = []
        for column in self.columns:
            lines.append(f"------ State set {column.index} ------")
            lines.extend(str(item) for item in column)
        return "\n".join(lines)
