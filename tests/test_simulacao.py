import pytest

from core.erros import ErroMealy, TransicaoIndefinida
from core.simulacao import RequisicaoSimulacao, ResultadoSimulacao, run_simulation

from conftest import SAMPLE_DIAGRAM


def _request(**overrides):
    fields = dict(
        estados="q0,q1,q2,q3",
        alfabeto_entrada="a,b",
        alfabeto_saida="0,1",
        diagrama=SAMPLE_DIAGRAM,
        cadeia="abab",
    )
    fields.update(overrides)
    return RequisicaoSimulacao(**fields)


def test_successful_simulation():
    resultado = run_simulation(_request())

    assert resultado.ok
    assert resultado.erro is None
    assert resultado.codigo is None
    assert resultado.historico.caminho == ("q0", "q1", "q0", "q1", "q0")
    assert resultado.historico.saida == "0000"
    assert resultado.unwrap() is resultado.historico
    assert resultado.mensagem.endswith("Saída Produzida: 0000")


@pytest.mark.parametrize("overrides, codigo", [
    ({"estados": "  "}, "especificacao_vazia"),
    ({"cadeia": "   "}, "especificacao_vazia"),
    ({"diagrama": "q0\tq1/0"}, "colunas_insuficientes"),
    ({"diagrama": "q0\tq1/0\tq0-1"}, "transicao_malformada"),
    ({"diagrama": "q0\tq1/0\tq0/1"}, "estado_desconhecido"),
    ({"cadeia": "abx"}, "transicao_indefinida"),
])
def test_errors_are_returned_as_result(overrides, codigo):
    resultado = run_simulation(_request(**overrides))

    assert not resultado.ok
    assert resultado.historico is None
    assert resultado.codigo == codigo
    assert isinstance(resultado.erro, ErroMealy)
    assert resultado.mensagem == str(resultado.erro)


def test_unwrap_raises_the_error():
    resultado = run_simulation(_request(cadeia="abx"))
    with pytest.raises(TransicaoIndefinida):
        resultado.unwrap()


def test_parse_errors_carry_line_number():
    diagram = SAMPLE_DIAGRAM.replace("q2\tq2/0", "q2\tq2_0")
    resultado = run_simulation(_request(diagrama=diagram))

    assert resultado.codigo == "transicao_malformada"
    assert resultado.erro.numero_linha == 3


def test_runtime_errors_have_no_line_number():
    resultado = run_simulation(_request(cadeia="c"))
    assert resultado.erro.numero_linha is None


def test_custom_separators():
    resultado = run_simulation(_request(
        estados="q0;q1",
        alfabeto_entrada="a;b",
        alfabeto_saida="0;1",
        diagrama="q0|q1/0|q0/1\nq1|q0/1|q1/0",
        cadeia="aab",
        separador=";",
        delimitador="|",
    ))

    assert resultado.historico.saida == "011"
    assert resultado.historico.caminho == ("q0", "q1", "q0", "q0")


def test_requests_are_independent():
    first = run_simulation(_request(cadeia="aabb"))
    run_simulation(_request(cadeia="abx"))
    again = run_simulation(_request(cadeia="aabb"))

    assert first == again
    assert isinstance(first, ResultadoSimulacao)
