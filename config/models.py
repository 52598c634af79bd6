"""Dataclass definitions for application configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

THEMES = ("light", "dark")

SAMPLE_DIAGRAM = "q0\tq1/0\tq0/1\nq1\tq2/0\tq0/0\nq2\tq2/0\tq3/1\nq3\tq1/0\tq0/0"


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    filepath: Path = Path("logs/simulador.log")
    max_bytes: int = 1024 * 1024
    backup_count: int = 3
    console: bool = True

    def resolved_path(self) -> Path:
        path = self.filepath if isinstance(self.filepath, Path) else Path(self.filepath)
        return path.expanduser().resolve()


@dataclass(frozen=True)
class SimulacaoConfig:
    """Separators used when reading the textual machine definition."""

    separador_lista: str = ","
    delimitador_colunas: str = "\t"


@dataclass(frozen=True)
class InterfaceConfig:
    """Desktop window settings."""

    tema: Literal["light", "dark"] = "light"
    titulo: str = "Simulador de Máquinas de Mealy"
    anim_ms: int = 400
    largura_minima_passo: int = 90


@dataclass(frozen=True)
class ExemploConfig:
    """Values pre-filled in the form."""

    estados: str = "q0,q1,q2,q3"
    alfabeto_entrada: str = "a,b"
    alfabeto_saida: str = "0,1"
    diagrama: str = SAMPLE_DIAGRAM
    cadeia: str = "abab"


@dataclass(frozen=True)
class Config:
    """Root configuration object."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    simulacao: SimulacaoConfig = field(default_factory=SimulacaoConfig)
    interface: InterfaceConfig = field(default_factory=InterfaceConfig)
    exemplo: ExemploConfig = field(default_factory=ExemploConfig)
