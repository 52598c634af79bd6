import pytest

from core.erros import ColunasInsuficientes, EspecificacaoVazia, TransicaoMalformada
from core.especificacao import (
    build_machine,
    parse_alphabet,
    parse_input_string,
    parse_states,
    parse_transition_diagram,
    parse_transition_token,
)
from core.maquina_mealy import Transicao

from conftest import SAMPLE_DIAGRAM


@pytest.mark.parametrize("text, expected", [
    ("q0,q1,q2,q3", ("q0", "q1", "q2", "q3")),
    ("  q0 , q1 ,q2  ", ("q0", "q1", "q2")),
    ("s", ("s",)),
    ("q0,,q1,", ("q0", "q1")),
])
def test_parse_states(text, expected):
    assert parse_states(text) == expected


@pytest.mark.parametrize("text", ["", "   ", ",", " , ,", None])
def test_parse_states_empty(text):
    with pytest.raises(EspecificacaoVazia) as exc:
        parse_states(text)
    assert exc.value.campo == "estados"
    assert exc.value.codigo == "especificacao_vazia"


def test_parse_alphabet_allows_empty():
    assert parse_alphabet("") == ()
    assert parse_alphabet(" a , b ") == ("a", "b")


def test_parse_states_custom_separator():
    assert parse_states("q0; q1", separator=";") == ("q0", "q1")


def test_parse_sample_diagram():
    diagram = parse_transition_diagram(SAMPLE_DIAGRAM, ("a", "b"))

    assert list(diagram) == ["q0", "q1", "q2", "q3"]
    assert diagram["q0"] == {"a": Transicao("q1", "0"), "b": Transicao("q0", "1")}
    assert diagram["q2"]["b"] == Transicao("q3", "1")


def test_parse_diagram_accepts_list_of_lines():
    diagram = parse_transition_diagram(["q0\tq1/0", "q1\tq0/1"], ("a",))
    assert diagram["q1"]["a"] == Transicao("q0", "1")


@pytest.mark.parametrize("token, expected", [
    ("q1/0", Transicao("q1", "0")),
    (" q1 / 0 ", Transicao("q1", "0")),
    ("q1/", Transicao("q1", "")),
    ("q1/0/1", Transicao("q1", "0/1")),
])
def test_parse_transition_token(token, expected):
    assert parse_transition_token(token, 1, 1) == expected


@pytest.mark.parametrize("line, coluna", [
    ("q0\tq1\tq0/1", 1),
    ("q0\tq1/0\tq0", 2),
    ("q0\tq1-0\tq0-1", 1),
])
def test_token_without_separator_is_malformed(line, coluna):
    with pytest.raises(TransicaoMalformada) as exc:
        parse_transition_diagram(line, ("a", "b"))
    assert exc.value.coluna == coluna
    assert exc.value.numero_linha == 1
    assert "/" not in exc.value.token


def test_insufficient_columns():
    with pytest.raises(ColunasInsuficientes) as exc:
        parse_transition_diagram("q0\tq1/0\tq0/1\nq1\tq2/0", ("a", "b"))
    err = exc.value
    assert err.numero_linha == 2
    assert err.esperadas == 3
    assert err.encontradas == 2
    assert err.linha == "q1\tq2/0"
    assert "linha 2" in str(err)


def test_line_using_wrong_delimiter_has_insufficient_columns():
    with pytest.raises(ColunasInsuficientes):
        parse_transition_diagram("q0 q1/0 q0/1", ("a", "b"))


def test_blank_lines_are_skipped_and_counted():
    diagram = parse_transition_diagram("\nq0\tq1/0\n   \nq1\tq0/1\n", ("a",))
    assert list(diagram) == ["q0", "q1"]

    with pytest.raises(TransicaoMalformada) as exc:
        parse_transition_diagram("\n\nq0\tq1", ("a",))
    assert exc.value.numero_linha == 3


def test_trailing_and_extra_columns_are_ignored():
    diagram = parse_transition_diagram("q0\tq1/0\tq0/1\t\t\nq1\tq0/0\tq1/1\tq9/9", ("a", "b"))
    assert diagram["q0"] == {"a": Transicao("q1", "0"), "b": Transicao("q0", "1")}
    assert "q9" not in {t.proximo_estado for t in diagram["q1"].values()}


def test_duplicate_state_row_replaces_earlier_row():
    diagram = parse_transition_diagram("q0\tq1/0\tq0/1\nq0\tq2/1\tq3/0", ("a", "b"))
    assert diagram["q0"] == {"a": Transicao("q2", "1"), "b": Transicao("q3", "0")}


def test_duplicate_state_row_does_not_merge():
    diagram = parse_transition_diagram("q0\tq1/0\tq0/1\nq0\tq2/1", ("a",))
    assert diagram["q0"] == {"a": Transicao("q2", "1")}


def test_duplicate_symbol_column_keeps_last():
    diagram = parse_transition_diagram("q0\tq1/0\tq2/1", ("a", "a"))
    assert diagram["q0"] == {"a": Transicao("q2", "1")}


def test_custom_column_delimiter():
    diagram = parse_transition_diagram("q0;q1/0;q0/1", ("a", "b"), delimiter=";")
    assert diagram["q0"]["b"] == Transicao("q0", "1")


def test_parse_input_string():
    assert parse_input_string("  abab ") == ("a", "b", "a", "b")
    assert parse_input_string("a b") == ("a", " ", "b")


@pytest.mark.parametrize("text", ["", "   ", "\t\n", None])
def test_parse_input_string_empty(text):
    with pytest.raises(EspecificacaoVazia) as exc:
        parse_input_string(text)
    assert exc.value.campo == "cadeia de entrada"


def test_build_machine():
    machine = build_machine("q0,q1,q2,q3", "a,b", "0,1", SAMPLE_DIAGRAM)

    assert machine.start_state == "q0"
    assert machine.states == ("q0", "q1", "q2", "q3")
    assert machine.input_alphabet == ("a", "b")
    assert machine.output_alphabet == ("0", "1")
    assert machine.transition_for("q3", "a") == Transicao("q1", "0")
    assert machine.transition_for("q3", "c") is None
    assert machine.transition_for("q7", "a") is None


def test_build_machine_tolerates_partial_diagram():
    machine = build_machine("q0,q1", "a", "0", "q0\tq1/0")
    assert "q1" not in machine.transitions
