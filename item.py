from dataclasses import dataclass
from typing import Self

from grammar import Production, Symbol

DOT = "•"


@dataclass(frozen=True)
class Item:
    production: Production
    dot_pos: int
    origin: int

    @classmethod
    def from_production(cls, production: Production, origin: int, dot_pos: int = 0) -> Self:
        return cls(production=production, dot_pos=dot_pos, origin=origin)

    @classmethod
    def from_moving(cls, item: Self) -> Self:
        if item.is_complete():
            raise IndexError(f"Dot position exceeds symbols amount")

        return cls(
            production=item.production,
            dot_pos=item.dot_pos + 1,
            origin=item.origin,
        )

    @property
    def lhs(self) -> Symbol:
        return self.production.lhs

    @property
    def rhs(self) -> tuple[Symbol, ...]:
        return self.production.rhs

    def is_complete(self) -> bool:
        return self.dot_pos >= len(self.rhs)

    def next_symbol(self) -> Symbol | None:
        if self.is_complete():
            return None
        return self.rhs[self.dot_pos]

    def dotted(self) -> str:
        rule = [s.name for s in self.rhs]
        rule.insert(self.dot_pos, DOT)
        return " ".join(rule)

    def __repr__(self):
        return f"Item({self})"

    def __str__(self) -> str:
        return f"{self.lhs} → {self.dotted()}, {self.origin}"
