#!/usr/bin/env python3
"""
Run the Meeting Assistant HTTP API.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from meeting_assistant.app import create_app
from meeting_assistant.config import get_config


def main():
    cfg = get_config()

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        level=cfg.log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
    )

    if not cfg.llm.api_key:
        logger.warning("No GITHUB_TOKEN or OPENAI_API_KEY set; AI insights and summaries are disabled")

    app = create_app(cfg)
    logger.info(f"Serving on http://{cfg.web.host}:{cfg.web.port}")
    app.run(host=cfg.web.host, port=cfg.web.port, debug=cfg.web.debug)


if __name__ == "__main__":
    main()
