"""
Flask application factory for the Meeting Assistant.
Sets up: Config, CORS, API blueprint, and health endpoint.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from loguru import logger

from meeting_assistant.assistant import MeetingAssistant
from meeting_assistant.config import AppConfig, get_config
from meeting_assistant.llm_client import LLMClient

ASSISTANT_KEY = "meeting_assistant"
CONFIG_KEY = "meeting_assistant.config"
LLM_CLIENT_KEY = "meeting_assistant.llm_client"


def create_app(
    config_object: AppConfig | None = None,
    assistant: Optional[MeetingAssistant] = None,
    llm_client: Optional[LLMClient] = None,
) -> Flask:
    """
    Flask application factory.

    The app owns at most one meeting at a time, stored in
    `app.extensions["meeting_assistant"]`; `POST /api/meeting` replaces it.
    """
    cfg = config_object or get_config()
    app = Flask(__name__)
    app.json.sort_keys = False

    CORS(app, resources={r"/api/*": {"origins": cfg.web.cors_origins}})

    app.extensions[CONFIG_KEY] = cfg
    app.extensions[LLM_CLIENT_KEY] = llm_client or LLMClient(cfg.llm)
    app.extensions[ASSISTANT_KEY] = assistant

    from .api import api_bp  # defer import until app exists
    app.register_blueprint(api_bp, url_prefix="/api")

    @app.get("/health")
    def health():
        current = app.extensions.get(ASSISTANT_KEY)
        return jsonify(
            {
                "status": "ok",
                "time": datetime.now(timezone.utc).isoformat(),
                "model": cfg.llm.model,
                "llm_configured": bool(cfg.llm.api_key),
                "meeting": current.state.id if current else None,
            }
        )

    logger.info(f"App initialized. Health at /health. model={cfg.llm.model}")
    return app
