import json
from pathlib import Path

import pytest

from config.loader import DEFAULT_CONFIG_PATH, load_config
from config.models import SAMPLE_DIAGRAM, Config, ExemploConfig, LoggingConfig


def test_default_config_file_matches_defaults():
    config = load_config()

    assert DEFAULT_CONFIG_PATH.exists()
    assert config.simulacao.delimitador_colunas == "\t"
    assert config.simulacao.separador_lista == ","
    assert config.interface.tema == "light"
    assert config.exemplo == ExemploConfig()
    assert config.exemplo.diagrama == SAMPLE_DIAGRAM
    assert config.logging.filepath == LoggingConfig().filepath


def test_yaml_config_resolves_log_path(tmp_path):
    path = tmp_path / "app.yaml"
    path.write_text(
        "logging:\n"
        "  level: DEBUG\n"
        "  filepath: logs/run.log\n"
        "interface:\n"
        "  tema: dark\n"
        "  anim_ms: 150\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.logging.level == "DEBUG"
    assert config.logging.filepath == (tmp_path / "logs/run.log").resolve()
    assert config.interface.tema == "dark"
    assert config.interface.anim_ms == 150
    assert config.simulacao == Config().simulacao


def test_json_config(tmp_path):
    path = tmp_path / "app.json"
    path.write_text(json.dumps({
        "simulacao": {"separador_lista": ";", "delimitador_colunas": "|"},
        "exemplo": {"cadeia": "aabb"},
    }), encoding="utf-8")

    config = load_config(str(path))

    assert config.simulacao.delimitador_colunas == "|"
    assert config.exemplo.cadeia == "aabb"
    assert config.exemplo.estados == "q0,q1,q2,q3"


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == Config()


@pytest.mark.parametrize("content", [
    "interface:\n  tema: neon\n",
    "interface:\n  anim_ms: 0\n",
    "simulacao:\n  separador_lista: ','\n  delimitador_colunas: ','\n",
    "simulacao:\n  delimitador_colunas: ''\n",
    "simulacao:\n  delimitador_colunas: '/'\n",
])
def test_invalid_values_are_rejected(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_unknown_keys_are_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("interface:\n  cor: azul\n", encoding="utf-8")

    with pytest.raises(TypeError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_unsupported_format(tmp_path):
    path = tmp_path / "app.toml"
    path.write_text("", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_logging_path_resolution():
    config = LoggingConfig(filepath=Path("~/mealy.log"))
    assert config.resolved_path() == Path("~/mealy.log").expanduser().resolve()
