import logging
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Iterable, Self


logger = logging.getLogger(__name__)

EPS = "~"
START = "S"
# Reserved names are longer than one character so they never collide
# with grammar symbols or input characters.
AUGMENTED = "S'"
EOF = "eof"
ARROW = "->"
ALT = "|"


class GrammarError(ValueError):
    pass


class Kind(Enum):
    TERMINAL = "terminal"
    NONTERMINAL = "nonterminal"
    EPSILON = "epsilon"


@dataclass(frozen=True)
class Symbol:
    name: str
    kind: Kind

    @classmethod
    def classify(cls, char: str) -> Self:
        if len(char) != 1 or not (char == EPS or char.isascii() and char.isalpha()):
            raise GrammarError(f"Symbols are single ASCII letters or {EPS!r}, got {char!r}")
        if char == EPS:
            return cls(char, Kind.EPSILON)
        if char.isupper():
            return cls(char, Kind.NONTERMINAL)
        return cls(char, Kind.TERMINAL)

    @classmethod
    def nonterminal(cls, name: str) -> Self:
        return cls(name, Kind.NONTERMINAL)

    def is_terminal(self) -> bool:
        return self.kind is Kind.TERMINAL

    def is_nonterminal(self) -> bool:
        return self.kind is Kind.NONTERMINAL

    def is_epsilon(self) -> bool:
        return self.kind is Kind.EPSILON

    def __str__(self) -> str:
        return self.name


EPSILON = Symbol(EPS, Kind.EPSILON)


@dataclass(frozen=True)
class Production:
    lhs: Symbol
    rhs: tuple[Symbol, ...]

    def __post_init__(self):
        if not self.lhs.is_nonterminal():
            raise GrammarError(f"Head of a production must be a nonterminal, got {self.lhs.name!r}")
        if not self.rhs:
            raise GrammarError(f"Empty body for {self.lhs}; use {EPS!r} for the empty alternative")
        if len(self.rhs) > 1 and any(s.is_epsilon() for s in self.rhs):
            raise GrammarError(f"{EPS!r} must stand alone in a body of {self.lhs}")

    @classmethod
    def from_text(cls, lhs: str, rhs: str) -> Self:
        return cls(
            lhs=Symbol.classify(lhs),
            rhs=tuple(Symbol.classify(c) for c in rhs),
        )

    def is_empty(self) -> bool:
        return len(self.rhs) == 1 and self.rhs[0].is_epsilon()

    def __str__(self) -> str:
        return f"{self.lhs} -> {''.join(s.name for s in self.rhs)}"


def augmented_production(start: str = START) -> Production:
    return Production(Symbol.nonterminal(AUGMENTED), (Symbol.nonterminal(start),))


def parse_line(line: str) -> tuple[str, list[str]]:
    """Splits `HEAD->ALT1|ALT2|...` into the head and its alternatives.

    Raises `GrammarError` when the arrow is missing, the head is not a single
    uppercase letter, one of the alternatives is empty or the arrow repeats.
    """
    if ARROW not in line:
        raise GrammarError(f"Missing {ARROW!r} in production {line!r}")

    head, body = line.split(ARROW, 1)
    if ARROW in body:
        raise GrammarError(f"Repeated {ARROW!r} in production {line!r}")
    if len(head) != 1 or not head.isupper():
        raise GrammarError(f"Head must be a single uppercase letter in {line!r}")

    alternatives = body.split(ALT)
    for alt in alternatives:
        if not alt:
            raise GrammarError(f"Empty alternative in {line!r}; use {EPS!r} instead")
    return head, alternatives


class Grammar:

    def __init__(self, productions: Iterable[Production] = ()):
        # dict keeps insertion order and gives O(1) duplicate checks
        self._productions: dict[Production, None] = {}
        self._by_lhs: dict[Symbol, list[Production]] = {}
        for p in productions:
            self.add_production(p)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Self:
        grammar = cls()
        for raw in lines:
            line = raw.strip()
            if not line:
                continue
            head, alternatives = parse_line(line)
            for alt in alternatives:
                grammar.add_production(head, alt)
        logger.info("Loaded grammar with %d productions", len(grammar))
        return grammar

    @classmethod
    def from_text(cls, text: str, sep: str | None = None) -> Self:
        """Builds a grammar from newline or `sep` separated productions.

        `S->aSb|~;A->a` is the joined form of a grammar file.
        """
        lines = text.split(sep) if sep else text.splitlines()
        return cls.from_lines(lines)

    def add_production(self, lhs: Production | Symbol | str, rhs: Iterable[Symbol] | str | None = None) -> bool:
        if isinstance(lhs, Production):
            production = lhs
        elif isinstance(lhs, Symbol):
            production = Production(lhs, tuple(rhs))
        else:
            production = Production.from_text(lhs, rhs)

        if production.lhs.name == AUGMENTED:
            raise GrammarError(f"{AUGMENTED!r} is reserved for the augmented start production")

        if production in self._productions:
            return False

        self._productions[production] = None
        self._by_lhs.setdefault(production.lhs, []).append(production)
        self.__dict__.pop("nullable", None)
        return True

    @property
    def productions(self) -> list[Production]:
        return list(self._productions)

    def rules_for(self, symbol: Symbol) -> list[Production]:
        return self._by_lhs.get(symbol, [])

    @property
    def nonterminals(self) -> set[Symbol]:
        s = set(self._by_lhs)
        for p in self._productions:
            s.update(v for v in p.rhs if v.is_nonterminal())
        return s

    @property
    def terminals(self) -> set[Symbol]:
        return {v for p in self._productions for v in p.rhs if v.is_terminal()}

    def compute_nullable(self) -> frozenset[Symbol]:
        nullable = {p.lhs for p in self._productions if p.is_empty()}

        is_changing = bool(nullable)
        while is_changing:
            is_changing = False
            for p in self._productions:
                if p.lhs in nullable:
                    continue
                if all(s.is_epsilon() or s in nullable for s in p.rhs):
                    nullable.add(p.lhs)
                    is_changing = True

        logger.debug("Nullable nonterminals: %s", sorted(s.name for s in nullable))
        return frozenset(nullable)

    @cached_property
    def nullable(self) -> frozenset[Symbol]:
        return self.compute_nullable()

    def __contains__(self, production: Production) -> bool:
        return production in self._productions

    def __iter__(self):
        return iter(self._productions)

    def __len__(self) -> int:
        return len(self._productions)

    def __str__(self) -> str:
        return "\n".join(str(p) for p in self._productions)
