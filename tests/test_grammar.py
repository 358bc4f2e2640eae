import pytest

from grammar import EPSILON, Grammar, GrammarError, Kind, Production, Symbol, augmented_production


def names(symbols) -> set[str]:
    return {s.name for s in symbols}


def test_classify():
    assert Symbol.classify("A").kind is Kind.NONTERMINAL
    assert Symbol.classify("a").kind is Kind.TERMINAL
    assert Symbol.classify("~") == EPSILON


def test_from_lines_splits_alternatives():
    g = Grammar.from_lines(["S->aSb|~"])
    assert [str(p) for p in g.productions] == ["S -> aSb", "S -> ~"]
    assert g.productions[1].is_empty()


def test_from_text_with_semicolons():
    g = Grammar.from_text("S->AB;A->a|~;B->b;", sep=";")
    assert len(g) == 4
    assert names(g.nonterminals) == {"S", "A", "B"}
    assert names(g.terminals) == {"a", "b"}


def test_from_lines_skips_blank_lines_and_newlines():
    g = Grammar.from_lines(["S->a\n", "\n", "S->b\n"])
    assert [str(p) for p in g] == ["S -> a", "S -> b"]


def test_add_production_deduplicates():
    g = Grammar()
    assert g.add_production("S", "aSb") is True
    assert g.add_production("S", "aSb") is False
    assert g.add_production(Production.from_text("S", "aSb")) is False
    assert len(g) == 1


def test_same_line_twice_gives_one_copy():
    g = Grammar.from_lines(["S->a|a", "S->a"])
    assert len(g) == 1


def test_rules_for_undefined_nonterminal():
    g = Grammar.from_lines(["S->X"])
    assert g.rules_for(Symbol.nonterminal("X")) == []


@pytest.mark.parametrize(
    "line",
    [
        "Sa",
        "->a",
        "SA->a",
        "s->a",
        "S->a|",
        "S->",
        "S->|b",
        "S->a~",
        "S->a->b",
        "S->aS->b|c",
        "S->a b",
        "S->a1",
        "S->(S)",
    ],
)
def test_malformed_lines(line):
    with pytest.raises(GrammarError):
        Grammar.from_lines([line])


def test_grammar_error_is_value_error():
    with pytest.raises(ValueError):
        Grammar.from_text("S=a")


def test_terminal_head_rejected():
    with pytest.raises(GrammarError):
        Production.from_text("a", "b")


def test_no_epsilon_gives_empty_nullable():
    g = Grammar.from_lines(["S->SS|a"])
    assert g.nullable == frozenset()


def test_nullable_base_case():
    g = Grammar.from_lines(["S->AB", "A->a|~", "B->b"])
    assert names(g.nullable) == {"A"}


def test_nullable_chain():
    g = Grammar.from_lines(["S->A", "A->B", "B->~"])
    assert names(g.nullable) == {"S", "A", "B"}


def test_nullable_needs_every_symbol():
    g = Grammar.from_lines(["S->AB|AC", "A->~", "B->~|b", "C->c"])
    assert names(g.nullable) == {"S", "A", "B"}


def test_terminal_disqualifies():
    g = Grammar.from_lines(["S->Aa", "A->~"])
    assert names(g.nullable) == {"A"}


def test_nullable_order_independent():
    # the production that makes S nullable is seen before A becomes nullable
    g = Grammar.from_lines(["S->AA", "A->B", "B->C", "C->~"])
    assert names(g.nullable) == {"S", "A", "B", "C"}


def test_nullable_refreshed_after_adding():
    g = Grammar.from_lines(["S->A", "A->a"])
    assert g.nullable == frozenset()
    g.add_production("A", "~")
    assert names(g.nullable) == {"S", "A"}


def test_grammar_str_and_membership():
    g = Grammar.from_lines(["S->aS|~"])
    assert str(g) == "S -> aS\nS -> ~"
    assert Production.from_text("S", "~") in g
    assert Production.from_text("S", "a") not in g


@pytest.mark.parametrize("char", ["SA", "", "1", "-", " ", "é", "S'"])
def test_classify_rejects_non_letters(char):
    with pytest.raises(GrammarError):
        Symbol.classify(char)


def test_add_production_rejects_multi_character_head():
    g = Grammar()
    with pytest.raises(GrammarError):
        g.add_production("SA", "a")
    assert len(g) == 0


def test_augmented_head_is_reserved():
    with pytest.raises(GrammarError):
        Grammar().add_production(augmented_production())
