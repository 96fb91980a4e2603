"""
Configuration management for the Meeting Assistant.
"""

import os
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class LLMConfig(BaseModel):
    """Configuration for the text-generation service."""
    model: str = Field(default="openai/gpt-4.1-nano")
    api_key: Optional[str] = Field(default=None, validate_default=True)
    api_base: str = "https://models.github.ai/inference"
    timeout: int = 30
    # Total attempts per call; 1 means a failed call is never retried
    max_retries: int = 1

    @field_validator('api_key')
    @classmethod
    def validate_api_key(cls, v):
        # Defer hard validation to runtime LLM calls so the app can boot without a key
        if v:
            return v
        return os.getenv('GITHUB_TOKEN') or os.getenv('OPENAI_API_KEY') or None

    @field_validator('model')
    @classmethod
    def validate_model(cls, v):
        if not v:
            v = os.getenv('MEETING_ASSISTANT_MODEL', 'openai/gpt-4.1-nano')
        return v

    @field_validator('max_retries')
    @classmethod
    def validate_max_retries(cls, v):
        return max(1, v)


class InsightConfig(BaseModel):
    """Sampling settings for the insight and summary prompts."""
    enabled: bool = True
    temperature: float = 0.7
    top_p: float = 0.9
    max_tokens: int = 500
    recent_transcript_lines: int = 3
    summary_temperature: float = 0.3
    summary_top_p: float = 0.8
    summary_max_tokens: int = 2000


class ProcessingConfig(BaseModel):
    """Windows and thresholds for the analyzer pipeline."""
    stop_on_error: bool = False
    # AmbiguityDetector
    ambiguity_window: int = 10
    # GoalDriftTracker
    goal_window: int = 5
    drift_threshold: int = 3
    relevance_threshold: float = 0.3
    overrun_ratio: float = 1.2
    completion_window: int = 3
    # ActionItemExtractor
    action_item_window: int = 5
    similarity_threshold: float = 0.7
    min_task_length: int = 10
    # SpecificityProposer
    specificity_window: int = 3
    # FinalizationRecommender
    finalization_threshold: float = 0.8
    conclusion_window: int = 3


class WebConfig(BaseModel):
    """Configuration for the HTTP surface."""
    host: str = "0.0.0.0"
    port: int = 3978
    debug: bool = False
    cors_origins: str = "*"


class AppConfig(BaseSettings):
    """Main application configuration."""
    llm: LLMConfig = Field(default_factory=LLMConfig)
    insights: InsightConfig = Field(default_factory=InsightConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    log_level: str = "INFO"

    # Analyzer run order
    analyzers: List[str] = Field(
        default_factory=lambda: [
            'ambiguity_detector',
            'goal_drift_tracker',
            'action_item_extractor',
            'specificity_proposer',
            'finalization_recommender',
        ]
    )

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix='MEETING_ASSISTANT_',
        env_nested_delimiter='__',
        extra='ignore',
    )

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Create configuration from environment variables."""
        config = cls()

        if os.getenv('GITHUB_TOKEN'):
            config.llm.api_key = os.getenv('GITHUB_TOKEN')
        elif os.getenv('OPENAI_API_KEY'):
            config.llm.api_key = os.getenv('OPENAI_API_KEY')

        if os.getenv('MEETING_ASSISTANT_MODEL'):
            config.llm.model = os.getenv('MEETING_ASSISTANT_MODEL')

        if os.getenv('MEETING_ASSISTANT_API_BASE'):
            config.llm.api_base = os.getenv('MEETING_ASSISTANT_API_BASE')

        if os.getenv('MEETING_ASSISTANT_STOP_ON_ERROR'):
            config.processing.stop_on_error = os.getenv('MEETING_ASSISTANT_STOP_ON_ERROR').lower() == 'true'

        if os.getenv('MEETING_ASSISTANT_INSIGHTS_ENABLED'):
            config.insights.enabled = os.getenv('MEETING_ASSISTANT_INSIGHTS_ENABLED').lower() == 'true'

        if os.getenv('MEETING_ASSISTANT_PORT'):
            try:
                config.web.port = int(os.getenv('MEETING_ASSISTANT_PORT'))
            except ValueError:
                pass

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary, without secrets."""
        llm = self.llm.model_dump()
        llm['api_key'] = bool(llm.get('api_key'))
        return {
            'llm': llm,
            'insights': self.insights.model_dump(),
            'processing': self.processing.model_dump(),
            'web': self.web.model_dump(),
            'log_level': self.log_level,
            'analyzers': list(self.analyzers),
        }


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
