"""Configuration loader utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from config.models import THEMES, Config, ExemploConfig, InterfaceConfig, LoggingConfig, SimulacaoConfig

DEFAULT_CONFIG_PATH = Path(__file__).with_name("app.yaml")


def _normalize_path(path: Path | str) -> Path:
    return path if isinstance(path, Path) else Path(path)


def _load_raw_config(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as stream:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(stream) or {}
        if suffix == ".json":
            return json.load(stream)
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(config_path: Optional[Path | str] = None) -> Config:
    """Load configuration file and construct Config dataclass."""

    config_path = _normalize_path(config_path or DEFAULT_CONFIG_PATH)
    raw = _load_raw_config(config_path)

    logging_raw = dict(raw.get("logging") or {})
    log_path = logging_raw.get("filepath")
    if log_path:
        logging_raw["filepath"] = (config_path.parent / log_path).resolve()
    logging = LoggingConfig(**logging_raw)

    simulacao = SimulacaoConfig(**(raw.get("simulacao") or {}))
    _validate_separators(simulacao)

    interface = InterfaceConfig(**(raw.get("interface") or {}))
    if interface.tema not in THEMES:
        raise ValueError(f"Unknown theme '{interface.tema}', expected one of {', '.join(THEMES)}.")
    if interface.anim_ms <= 0:
        raise ValueError("interface.anim_ms must be a positive number of milliseconds.")

    exemplo = ExemploConfig(**(raw.get("exemplo") or {}))

    return Config(logging=logging, simulacao=simulacao, interface=interface, exemplo=exemplo)


def _validate_separators(simulacao: SimulacaoConfig) -> None:
    if not simulacao.separador_lista or not simulacao.delimitador_colunas:
        raise ValueError("List separator and column delimiter must not be empty.")
    if simulacao.separador_lista == simulacao.delimitador_colunas:
        raise ValueError("Column delimiter must differ from the list separator.")
    if "/" in (simulacao.separador_lista, simulacao.delimitador_colunas):
        raise ValueError("'/' is reserved for the nextState/output separator.")
