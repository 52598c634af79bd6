from dataclasses import dataclass
from typing import Optional

from core.erros import ErroMealy
from core.especificacao import COLUMN_DELIMITER, LIST_SEPARATOR, build_machine, parse_input_string
from core.maquina_mealy import HistoricoSimulacao


@dataclass(frozen=True)
class RequisicaoSimulacao:
    """Os cinco blocos de texto de um pedido de simulação."""
    estados: str
    alfabeto_entrada: str
    alfabeto_saida: str
    diagrama: str
    cadeia: str
    separador: str = LIST_SEPARATOR
    delimitador: str = COLUMN_DELIMITER


@dataclass(frozen=True)
class ResultadoSimulacao:
    """Histórico da simulação ou o erro que a interrompeu, nunca os dois."""
    historico: Optional[HistoricoSimulacao] = None
    erro: Optional[ErroMealy] = None

    @property
    def ok(self) -> bool:
        return self.erro is None

    @property
    def codigo(self) -> Optional[str]:
        return self.erro.codigo if self.erro is not None else None

    @property
    def mensagem(self) -> str:
        if self.erro is not None:
            return self.erro.mensagem
        return self.historico.summary()

    def unwrap(self) -> HistoricoSimulacao:
        if self.erro is not None:
            raise self.erro
        return self.historico


def run_simulation(requisicao: RequisicaoSimulacao) -> ResultadoSimulacao:
    """Lê a especificação e simula a cadeia; erros de Mealy viram resultado."""
    try:
        machine = build_machine(
            requisicao.estados,
            requisicao.alfabeto_entrada,
            requisicao.alfabeto_saida,
            requisicao.diagrama,
            separator=requisicao.separador,
            delimiter=requisicao.delimitador,
        )
        symbols = parse_input_string(requisicao.cadeia)
        historico = machine.simulate_history(symbols)
    except ErroMealy as e:
        return ResultadoSimulacao(erro=e)
    return ResultadoSimulacao(historico=historico)
