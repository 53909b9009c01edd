import logging

from hypothesis import given, strategies as st

from jsonparsec.Combinators import alternation, choice, left, quoted, right, sequence, traced
from jsonparsec.Char import digits
from jsonparsec.Prim import literal, run_parser

from conftest import assert_error, assert_ok


# --- Alternation ---

def test_alternation_basic():
    p = alternation(literal("Hello"), literal("Goodbye"))
    assert_error(run_parser(p, ""), "")
    assert_ok(run_parser(p, "Hello"), "Hello", "")
    assert_ok(run_parser(p, "Goodbye"), "Goodbye", "")
    # Both could match; the first one wins
    assert_ok(run_parser(p, "Hello Goodbye"), "Hello", " Goodbye")


def test_alternation_retries_from_original_input():
    # p1 gets past "ab" before failing; p2 still starts at "abd"
    p1 = right(literal("ab") & literal("c"))
    p2 = literal("abd")
    assert_ok(run_parser(alternation(p1, p2), "abd"), "abd", "")


def test_alternation_reports_second_failure():
    p1 = right(literal("ab") & literal("c"))
    p2 = literal("x")
    # p1 failed at "d", but the reported position is where p2 failed
    assert_error(run_parser(alternation(p1, p2), "abd"), "abd")


@given(st.sampled_from(["a", "ab", "b", "ba"]), st.sampled_from(["a", "b", "bb"]), st.text(alphabet="ab", max_size=6))
def test_alternation_law(s1, s2, text):
    p1, p2 = literal(s1), literal(s2)
    res = run_parser(alternation(p1, p2), text)
    first = run_parser(p1, text)
    expected = first if first.ok else run_parser(p2, text)
    assert res == expected


# --- Sequence ---

def test_sequence():
    p1 = sequence(literal("Goodbye"), literal(" Adieu"))
    p2 = sequence(literal("Hello"), literal(" Adieu"))
    p3 = sequence(literal("Hello"), literal(" Goodbye"))

    for p in (p1, p2, p3):
        assert_error(run_parser(p, ""), "")

    # first parser fails: its own input
    assert_error(run_parser(p1, "Hello Adieu"), "Hello Adieu")
    # second parser fails: the second parser's input
    assert_error(run_parser(p2, "Hello Goodbye"), " Goodbye")
    assert_ok(run_parser(p3, "Hello Goodbye"), ("Hello", " Goodbye"), "")


def test_sequence_operators():
    p = literal("a") & literal("b")
    assert_ok(run_parser(p, "abc"), ("a", "b"), "c")
    assert_ok(run_parser(literal("a") > literal("b"), "abc"), "b", "c")
    assert_ok(run_parser(literal("a") < literal("b"), "abc"), "a", "c")


# --- Projection ---

def test_left():
    p = left(sequence(literal("Hello"), literal(" Goodbye")))
    assert_error(run_parser(p, ""), "")
    assert_ok(run_parser(p, "Hello Goodbye"), "Hello", "")
    assert_ok(run_parser(p, "Hello Goodbye Again"), "Hello", " Again")


def test_right():
    p = right(sequence(literal("Hello"), literal(" Goodbye")))
    assert_error(run_parser(p, ""), "")
    assert_ok(run_parser(p, "Hello Goodbye"), " Goodbye", "")
    assert_ok(run_parser(p, "Hello Goodbye Again"), " Goodbye", " Again")


def test_projection_keeps_failure_position():
    p = left(sequence(literal("Hello"), literal("!")))
    assert_error(run_parser(p, "Hello?"), "?")


# --- Quoted ---

def test_quoted():
    p = quoted(literal("Hello"))
    assert_error(run_parser(p, ""), "")
    # missing closing quote
    assert_error(run_parser(p, "\"Hello"), "")
    # missing opening quote
    assert_error(run_parser(p, "Hello\""), "Hello\"")
    # inner parser fails between the quotes
    assert_error(run_parser(p, "\"Jello\""), "Jello\"")
    assert_ok(run_parser(p, "\"Hello\""), "Hello", "")
    assert_ok(run_parser(p, "\"Hello\" there"), "Hello", " there")


# --- Choice ---

def test_choice_first_success_wins():
    p = choice([literal("a"), literal("ab"), literal("b")])
    assert_ok(run_parser(p, "ab"), "a", "b")
    assert_ok(run_parser(p, "b"), "b", "")


def test_choice_all_fail():
    p = choice([literal("a"), right(literal("b") & literal("c"))])
    # the last alternative's failure is reported
    assert_error(run_parser(p, "bd"), "d")


def test_choice_empty():
    assert_error(run_parser(choice([]), "input"), "input")


# --- Traced ---

def test_traced_logs_progress(caplog):
    p = traced("number", digits())
    with caplog.at_level(logging.DEBUG, logger="jsonparsec"):
        assert_ok(run_parser(p, "12x"), "12", "x")
        assert_error(run_parser(p, "x"), "x")

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("number: '12x'") for m in messages)
    assert "number matched 2 chars" in messages
    assert any(m.startswith("number failed at") for m in messages)


def test_traced_is_silent_above_debug(caplog):
    p = traced("number", digits())
    with caplog.at_level(logging.INFO, logger="jsonparsec"):
        assert_ok(run_parser(p, "7"), "7", "")
    assert caplog.records == []
