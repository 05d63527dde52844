import pytest

from dotgraph.config import DEFAULT_MAX_DEPTH, Config
from dotgraph.errors import ConfigurationError


def test_defaults():
    config = Config()

    assert config.max_depth == DEFAULT_MAX_DEPTH
    assert config.minimal is False
    assert config.implicit_nodes is True


def test_from_env_reads_dotgraph_variables():
    config = Config.from_env(
        environ={
            "DOTGRAPH_MAX_DEPTH": "16",
            "DOTGRAPH_MINIMAL": "yes",
            "DOTGRAPH_IMPLICIT_NODES": "off",
        }
    )

    assert config == Config(max_depth=16, minimal=True, implicit_nodes=False)


def test_from_env_falls_back_to_defaults():
    assert Config.from_env(environ={}) == Config()


def test_from_env_uses_process_environment(monkeypatch):
    monkeypatch.setenv("DOTGRAPH_MAX_DEPTH", "8")

    assert Config.from_env().max_depth == 8


@pytest.mark.parametrize(
    "environ",
    [
        {"DOTGRAPH_MAX_DEPTH": "deep"},
        {"DOTGRAPH_MAX_DEPTH": "0"},
        {"DOTGRAPH_MINIMAL": "maybe"},
    ],
)
def test_from_env_rejects_malformed_values(environ):
    with pytest.raises(ConfigurationError):
        Config.from_env(environ=environ)
