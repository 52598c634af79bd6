from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from core.erros import EstadoDesconhecido, TransicaoIndefinida

TABLE_HEADERS = ("Passo", "Entrada", "Estado Anterior", "Novo Estado", "Saída")


@dataclass(frozen=True)
class Transicao:
    """Destino e símbolo de saída de uma transição (estado, entrada)."""
    proximo_estado: str
    saida: str

    def __str__(self):
        return f"{self.proximo_estado}/{self.saida}"


@dataclass(frozen=True)
class PassoSimulacao:
    """Uma transição executada durante a simulação."""
    passo: int
    entrada: str
    estado_anterior: str
    novo_estado: str
    saida: str

    def as_row(self) -> Tuple[int, str, str, str, str]:
        return (self.passo, self.entrada, self.estado_anterior, self.novo_estado, self.saida)


@dataclass(frozen=True)
class HistoricoSimulacao:
    """Resultado completo de uma simulação.

    ``caminho`` tem sempre um estado a mais que ``passos``: o primeiro
    elemento é o estado inicial, que na Máquina de Mealy não produz saída.
    """
    caminho: Tuple[str, ...]
    passos: Tuple[PassoSimulacao, ...]
    saida: str

    @property
    def estado_final(self) -> str:
        return self.caminho[-1]

    @property
    def entradas(self) -> List[str]:
        return [p.entrada for p in self.passos]

    @property
    def saidas(self) -> List[str]:
        return [p.saida for p in self.passos]

    def table_rows(self) -> List[Tuple[int, str, str, str, str]]:
        """Linhas da tabela detalhada de transições (ver ``TABLE_HEADERS``)."""
        return [p.as_row() for p in self.passos]

    def summary(self) -> str:
        """Texto do resultado: sequência de estados e saída produzida."""
        return (
            f"Transições de Estado: {' -> '.join(self.caminho)}\n"
            f"Saída Produzida: {self.saida}"
        )


class MaquinaMealy:
    """Representa uma Máquina de Mealy já validada.

    A máquina é imutável depois de construída; o mapeamento de transições é
    uma tabela de dois níveis estado -> símbolo -> ``Transicao``. Pares não
    definidos são tolerados aqui e só falham quando a simulação os alcança.
    """
    def __init__(self,
                 states: Sequence[str],
                 input_alphabet: Sequence[str],
                 output_alphabet: Sequence[str],
                 transitions: Mapping[str, Mapping[str, Transicao]]):
        if not states:
            raise ValueError("A máquina precisa de pelo menos um estado.")
        self.states: Tuple[str, ...] = tuple(states)
        self.start_state: str = self.states[0]
        self.input_alphabet: Tuple[str, ...] = tuple(input_alphabet)
        self.output_alphabet: Tuple[str, ...] = tuple(output_alphabet)
        self._transitions: Dict[str, Mapping[str, Transicao]] = {
            src: MappingProxyType(dict(row)) for src, row in transitions.items()
        }

    @property
    def transitions(self) -> Mapping[str, Mapping[str, Transicao]]:
        return MappingProxyType(self._transitions)

    def transition_for(self, state: str, symbol: str) -> Optional[Transicao]:
        row = self._transitions.get(state)
        if row is None:
            return None
        return row.get(symbol)

    def iter_transitions(self) -> Iterable[Tuple[str, str, Transicao]]:
        """Percorre (origem, entrada, transição) na ordem em que foram definidas."""
        for src, row in self._transitions.items():
            for symbol, transicao in row.items():
                yield src, symbol, transicao

    def simulate_history(self, input_symbols: Iterable[str]) -> HistoricoSimulacao:
        """
        Executa a máquina sobre a entrada, um símbolo por vez.

        Lança ``EstadoDesconhecido`` se o estado atual não tem linha no
        diagrama e ``TransicaoIndefinida`` se a linha existe mas não define o
        símbolo. Em caso de erro nenhum histórico parcial é devolvido.
        """
        current_state = self.start_state
        path = [current_state]
        steps = []
        outputs = []

        for step, symbol in enumerate(input_symbols, start=1):
            row = self._transitions.get(current_state)
            if row is None:
                raise EstadoDesconhecido(current_state, step)
            transicao = row.get(symbol)
            if transicao is None:
                raise TransicaoIndefinida(current_state, symbol, step)

            steps.append(PassoSimulacao(step, symbol, current_state, transicao.proximo_estado, transicao.saida))
            outputs.append(transicao.saida)
            current_state = transicao.proximo_estado
            path.append(current_state)

        return HistoricoSimulacao(tuple(path), tuple(steps), "".join(outputs))

    def simulate(self, input_symbols: Iterable[str]) -> str:
        """Simulação rápida que retorna apenas a saída final."""
        return self.simulate_history(input_symbols).saida

    def __repr__(self):
        return (f"MaquinaMealy(states={list(self.states)!r}, "
                f"input_alphabet={list(self.input_alphabet)!r}, "
                f"output_alphabet={list(self.output_alphabet)!r})")
