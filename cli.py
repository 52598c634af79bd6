"""Interface de linha de comando do simulador de Máquinas de Mealy."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from config.loader import load_config
from config.models import Config
from core.maquina_mealy import TABLE_HEADERS, HistoricoSimulacao
from core.simulacao import RequisicaoSimulacao, run_simulation

logger = logging.getLogger("mealy.cli")

EXIT_OK = 0
EXIT_SIMULATION_ERROR = 1
EXIT_USAGE = 2


def add_arguments(parser: argparse.ArgumentParser) -> None:
    """Opções da simulação; campos omitidos usam o exemplo da configuração."""

    parser.add_argument("--estados", help="Estados separados por vírgula (o primeiro é o inicial).")
    parser.add_argument("--alfabeto-entrada", dest="alfabeto_entrada", help="Alfabeto de entrada.")
    parser.add_argument("--alfabeto-saida", dest="alfabeto_saida", help="Alfabeto de saída.")
    diagram = parser.add_mutually_exclusive_group()
    diagram.add_argument(
        "--diagrama",
        help="Diagrama de transições em linha; aceita os escapes \\t e \\n.",
    )
    diagram.add_argument(
        "--transicoes",
        type=Path,
        help="Arquivo com o diagrama de transições ('-' lê da entrada padrão).",
    )
    parser.add_argument("--cadeia", help="Cadeia de entrada; cada caractere é um símbolo.")


def decode_escapes(text: str) -> str:
    return text.replace("\\t", "\t").replace("\\n", "\n")


def _read_diagram(args: argparse.Namespace, config: Config, stdin: Optional[TextIO]) -> str:
    if args.diagrama is not None:
        return decode_escapes(args.diagrama)
    if args.transicoes is not None:
        if str(args.transicoes) == "-":
            return (stdin or sys.stdin).read()
        return args.transicoes.read_text(encoding="utf-8")
    return config.exemplo.diagrama


def build_request(args: argparse.Namespace, config: Config, stdin: Optional[TextIO] = None) -> RequisicaoSimulacao:
    exemplo = config.exemplo

    def _pick(value: Optional[str], default: str) -> str:
        return default if value is None else value

    return RequisicaoSimulacao(
        estados=_pick(args.estados, exemplo.estados),
        alfabeto_entrada=_pick(args.alfabeto_entrada, exemplo.alfabeto_entrada),
        alfabeto_saida=_pick(args.alfabeto_saida, exemplo.alfabeto_saida),
        diagrama=_read_diagram(args, config, stdin),
        cadeia=_pick(args.cadeia, exemplo.cadeia),
        separador=config.simulacao.separador_lista,
        delimitador=config.simulacao.delimitador_colunas,
    )


def format_table(historico: HistoricoSimulacao) -> str:
    """Tabela detalhada de transições em texto alinhado."""
    rows = [TABLE_HEADERS] + [tuple(str(v) for v in row) for row in historico.table_rows()]
    widths = [max(len(row[i]) for row in rows) for i in range(len(TABLE_HEADERS))]
    lines = []
    for n, row in enumerate(rows):
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
        if n == 0:
            lines.append("  ".join("-" * w for w in widths))
    return "\n".join(lines)


def run(args: argparse.Namespace, config: Config, stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None, stdin: Optional[TextIO] = None) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    try:
        requisicao = build_request(args, config, stdin)
    except OSError as e:
        logger.error("Could not read transition diagram: %s", e)
        print(f"Erro: não foi possível ler o diagrama de transições: {e}", file=stderr)
        return EXIT_USAGE

    resultado = run_simulation(requisicao)
    if not resultado.ok:
        logger.warning("Simulation failed [%s]: %s", resultado.codigo, resultado.mensagem)
        print(f"Erro: {resultado.mensagem}", file=stderr)
        return EXIT_SIMULATION_ERROR

    historico = resultado.historico
    logger.info("Simulated '%s': output '%s'", requisicao.cadeia.strip(), historico.saida)
    print(historico.summary(), file=stdout)
    print(file=stdout)
    print(format_table(historico), file=stdout)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Simulador de Máquinas de Mealy (linha de comando).")
    parser.add_argument("--config", type=Path, default=None, help="Arquivo de configuração YAML/JSON.")
    add_arguments(parser)
    args = parser.parse_args(argv)
    return run(args, load_config(args.config))


if __name__ == "__main__":
    sys.exit(main())
