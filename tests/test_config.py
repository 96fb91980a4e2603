"""Tests for configuration loading and analyzer construction."""

import pytest

from meeting_assistant.analyzers import ANALYZER_CLASSES, build_analyzers, default_analyzers
from meeting_assistant.config import AppConfig, LLMConfig, get_config, reset_config, set_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GITHUB_TOKEN",
        "OPENAI_API_KEY",
        "MEETING_ASSISTANT_MODEL",
        "MEETING_ASSISTANT_API_BASE",
        "MEETING_ASSISTANT_STOP_ON_ERROR",
        "MEETING_ASSISTANT_INSIGHTS_ENABLED",
        "MEETING_ASSISTANT_PORT",
        "MEETING_ASSISTANT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    reset_config()


def test_defaults():
    cfg = AppConfig()

    assert cfg.llm.model == "openai/gpt-4.1-nano"
    assert cfg.llm.api_base == "https://models.github.ai/inference"
    assert cfg.llm.max_retries == 1
    assert cfg.processing.stop_on_error is False
    assert cfg.processing.similarity_threshold == 0.7
    assert cfg.insights.max_tokens == 500
    assert cfg.web.port == 3978


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_example")
    monkeypatch.setenv("MEETING_ASSISTANT_MODEL", "openai/gpt-4.1-mini")
    monkeypatch.setenv("MEETING_ASSISTANT_STOP_ON_ERROR", "true")
    monkeypatch.setenv("MEETING_ASSISTANT_INSIGHTS_ENABLED", "false")
    monkeypatch.setenv("MEETING_ASSISTANT_PORT", "8080")
    monkeypatch.setenv("MEETING_ASSISTANT_LOG_LEVEL", "DEBUG")

    cfg = AppConfig.from_env()

    assert cfg.llm.api_key == "ghp_example"
    assert cfg.llm.model == "openai/gpt-4.1-mini"
    assert cfg.processing.stop_on_error is True
    assert cfg.insights.enabled is False
    assert cfg.web.port == 8080
    assert cfg.log_level == "DEBUG"


def test_invalid_port_is_ignored(monkeypatch):
    monkeypatch.setenv("MEETING_ASSISTANT_PORT", "not-a-port")
    assert AppConfig.from_env().web.port == 3978


def test_nested_settings(monkeypatch):
    monkeypatch.setenv("MEETING_ASSISTANT_PROCESSING__DRIFT_THRESHOLD", "4")
    assert AppConfig().processing.drift_threshold == 4


def test_api_key_falls_back_to_openai_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-example")
    assert LLMConfig().api_key == "sk-example"


def test_max_retries_is_at_least_one():
    assert LLMConfig(max_retries=0).max_retries == 1


def test_to_dict_hides_the_key():
    cfg = AppConfig(llm=LLMConfig(api_key="secret"))
    assert cfg.to_dict()["llm"]["api_key"] is True


def test_global_config_roundtrip():
    cfg = AppConfig(llm=LLMConfig(api_key="secret"))
    set_config(cfg)
    assert get_config() is cfg
    reset_config()
    assert get_config() is not cfg


class TestAnalyzerConstruction:
    def test_default_order(self):
        cfg = AppConfig()
        assert [a.name for a in default_analyzers(cfg)] == list(ANALYZER_CLASSES)

    def test_unknown_analyzer(self):
        with pytest.raises(ValueError):
            build_analyzers(["ambiguity_detector", "mind_reader"], AppConfig())

    def test_analyzers_share_processing_config(self):
        cfg = AppConfig()
        cfg.processing.drift_threshold = 2
        analyzers = build_analyzers(["goal_drift_tracker"], cfg)
        assert analyzers[0].config.drift_threshold == 2
