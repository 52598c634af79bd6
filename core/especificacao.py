"""Leitura da especificação textual de uma Máquina de Mealy.

Formato aceito:
    estados ............ q0,q1,q2,q3   (o primeiro é o estado inicial)
    alfabeto entrada ... a,b
    alfabeto saída ..... 0,1
    diagrama ........... uma linha por estado, colunas separadas por TAB:
                         q0<TAB>q1/0<TAB>q0/1
    cadeia de entrada .. abab          (cada caractere é um símbolo)
"""
import re
from typing import Dict, Iterable, Sequence, Tuple, Union

from core.erros import ColunasInsuficientes, EspecificacaoVazia, TransicaoMalformada
from core.maquina_mealy import MaquinaMealy, Transicao

LIST_SEPARATOR = ","
COLUMN_DELIMITER = "\t"
TRANSITION_SEPARATOR = "/"


def _split_list(text: str, separator: str) -> Tuple[str, ...]:
    pattern = r"\s*" + re.escape(separator) + r"\s*"
    return tuple(item for item in re.split(pattern, (text or "").strip()) if item)


def parse_states(text: str, separator: str = LIST_SEPARATOR) -> Tuple[str, ...]:
    """Lê a lista de estados; o primeiro estado é o inicial."""
    states = _split_list(text, separator)
    if not states:
        raise EspecificacaoVazia("estados")
    return states


def parse_alphabet(text: str, separator: str = LIST_SEPARATOR) -> Tuple[str, ...]:
    return _split_list(text, separator)


def parse_transition_token(token: str, numero_linha: int, coluna: int) -> Transicao:
    """Converte 'proximo/saida' em ``Transicao``; só a primeira '/' separa."""
    token = token.strip()
    if TRANSITION_SEPARATOR not in token:
        raise TransicaoMalformada(token, numero_linha, coluna)
    next_state, output = token.split(TRANSITION_SEPARATOR, 1)
    return Transicao(next_state.strip(), output.strip())


def parse_transition_diagram(lines: Union[str, Iterable[str]],
                             input_alphabet: Sequence[str],
                             delimiter: str = COLUMN_DELIMITER) -> Dict[str, Dict[str, Transicao]]:
    """
    Monta a tabela estado -> símbolo -> ``Transicao`` a partir das linhas do diagrama.

    Linhas em branco são ignoradas, assim como colunas vazias no fim da linha
    e colunas além do tamanho do alfabeto. Se um estado aparece em mais de uma
    linha, a última linha substitui a anterior por inteiro; colunas repetidas
    do mesmo símbolo também ficam com a última.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    required = len(input_alphabet) + 1
    diagram: Dict[str, Dict[str, Transicao]] = {}

    for numero_linha, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        tokens = line.split(delimiter)
        while tokens and not tokens[-1].strip():
            tokens.pop()
        if len(tokens) < required:
            raise ColunasInsuficientes(line, numero_linha, required, len(tokens))

        source = tokens[0].strip()
        row: Dict[str, Transicao] = {}
        for i, symbol in enumerate(input_alphabet):
            row[symbol] = parse_transition_token(tokens[i + 1], numero_linha, i + 1)
        diagram[source] = row

    return diagram


def parse_input_string(text: str) -> Tuple[str, ...]:
    input_str = (text or "").strip()
    if not input_str:
        raise EspecificacaoVazia("cadeia de entrada")
    return tuple(input_str)


def build_machine(states_text: str,
                  input_alphabet_text: str,
                  output_alphabet_text: str,
                  diagram_text: Union[str, Iterable[str]],
                  separator: str = LIST_SEPARATOR,
                  delimiter: str = COLUMN_DELIMITER) -> MaquinaMealy:
    """Cria uma ``MaquinaMealy`` a partir dos quatro blocos de texto."""
    states = parse_states(states_text, separator)
    input_alphabet = parse_alphabet(input_alphabet_text, separator)
    output_alphabet = parse_alphabet(output_alphabet_text, separator)
    transitions = parse_transition_diagram(diagram_text, input_alphabet, delimiter)
    return MaquinaMealy(states, input_alphabet, output_alphabet, transitions)
