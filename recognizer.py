import argparse
import logging
import sys

from grammar import EOF, START, Grammar, GrammarError, Kind, Symbol
from chart import Chart
from item import Item


logger = logging.getLogger(__name__)


def predict(chart: Chart, grammar: Grammar, item: Item, i: int):
    # [A -> a • B b, j] adds [B -> • g, i] for every B -> g
    b = item.next_symbol()
    for p in grammar.rules_for(b):
        chart[i].add(Item.from_production(p, origin=i))

    # Aycock & Horspool: step over a nullable B instead of completing B -> eps
    if b in grammar.nullable:
        chart[i].add(Item.from_moving(item))


def scan(chart: Chart, item: Item, i: int, a: str):
    c = item.next_symbol()
    if c is not None and c.is_terminal() and c.name == a:
        chart[i + 1].add(Item.from_moving(item))


def complete(chart: Chart, item: Item, i: int):
    # origin may equal i, so iterate over a snapshot
    for waiting in list(chart[item.origin].waiting_on(item.lhs)):
        chart[i].add(Item.from_moving(waiting))


def close_column(chart: Chart, grammar: Grammar, i: int):
    """Applies predict and complete to column `i` until it stops growing.

    Items appended while the column is processed are visited in the same pass.
    A single pass reaches the fixed point: an item completed with origin `i`
    has a nullable head, so anything added later that waits on that head is
    advanced by `predict` itself.
    """
    column = chart[i]
    j = 0
    while j < len(column):
        item = column[j]
        if item.is_complete():
            complete(chart, item, i)
        elif item.next_symbol().is_nonterminal():
            predict(chart, grammar, item, i)
        j += 1
    logger.debug("Column %d closed with %d items", i, len(column))


def scan_column(chart: Chart, i: int, a: str):
    if a == EOF:
        return
    for item in list(chart[i].waiting_on(Symbol(a, Kind.TERMINAL))):
        scan(chart, item, i, a)


def build_chart(grammar: Grammar, word: str, start: str = START) -> Chart:
    chart = Chart(len(word), start=start)
    for i, a in enumerate(word):
        close_column(chart, grammar, i)
        scan_column(chart, i, a)
    close_column(chart, grammar, len(word))
    scan_column(chart, len(word), EOF)
    return chart


def recognize(grammar: Grammar, word: str, start: str = START) -> bool:
    accepted = build_chart(grammar, word, start=start).accepted()
    logger.info("Word %r %s", word, "accepted" if accepted else "rejected")
    return accepted


def word_in_grammar(grammar_text: str, word: str) -> bool:
    return recognize(Grammar.from_text(grammar_text, sep=";"), word)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Earley recognizer for single-character grammars")
    parser.add_argument("grammar", nargs="?", default="CFG.txt", help="file with one HEAD->ALT|ALT production per line")
    parser.add_argument("word", nargs="?", help="word to check; prompted for when omitted")
    parser.add_argument("-s", "--start", default=START, help="start nonterminal")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--dump", action="store_true", help="print the chart table")
    parser.add_argument("--draw", action="store_true", help="draw the chart graph")
    args = parser.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        with open(args.grammar, encoding="utf-8") as f:
            grammar = Grammar.from_lines(f)
    except (OSError, GrammarError) as e:
        print(e, file=sys.stderr)
        return 2

    try:
        word = args.word if args.word is not None else input("Enter string\n").strip()
    except EOFError:
        print("No input string given", file=sys.stderr)
        return 2

    chart = build_chart(grammar, word, start=args.start)

    if args.dump or args.draw:
        import diagnostics

        if args.dump:
            print(diagnostics.chart_frame(chart).to_string(index=False))
        if args.draw:
            diagnostics.visualize(chart)

    if chart.accepted():
        print("This string belongs to your language")
        return 0
    print("This string does not belong to your language")
    return 1


if __name__ == "__main__":
    sys.exit(main())
