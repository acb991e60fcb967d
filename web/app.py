"""
Flask JSON front-end for Hacker Stories.

Renders the search session as JSON and forwards user events to it unchanged.

Routes
──────
GET    /api/stories              Visible stories, loading/error flags, live term
PUT    /api/search-term          {"term": "..."}: update the live term (no fetch)
POST   /api/search               Submit the live term (one fetch)
DELETE /api/stories/<story_id>   Dismiss a story
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import httpx
from dotenv import load_dotenv
from flask import Flask, current_app, jsonify, request

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from core.exceptions import EmptySearchTermError
from core.preferences import PreferenceStore
from core.session import SearchSession

logger = logging.getLogger(__name__)

SESSION_KEY = "search_session"


def _session() -> SearchSession:
    return current_app.extensions[SESSION_KEY]


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Flask:
    """Build the Flask app around a single ``SearchSession``.

    Args:
        settings: Application configuration; read from the environment if omitted.
        transport: Optional httpx transport handed to the fetch orchestrator.
    """
    settings = settings or Settings()
    settings.validate()

    app = Flask(__name__)
    app.extensions[SESSION_KEY] = SearchSession(
        settings, PreferenceStore(settings.db_path), transport=transport
    )

    # ── Stories ────────────────────────────────────────────────────────────

    @app.route("/api/stories")
    async def list_stories():
        """Return the rendered session, running the startup fetch on first use."""
        session = _session()
        await session.start()
        return jsonify(session.snapshot())

    @app.route("/api/stories/<story_id>", methods=["DELETE"])
    def dismiss_story(story_id: str):
        """Dismiss a story from the current result list."""
        session = _session()
        session.on_item_dismissed(story_id)
        return jsonify(session.snapshot())

    # ── Search ─────────────────────────────────────────────────────────────

    @app.route("/api/search-term", methods=["PUT"])
    def update_search_term():
        body = request.get_json(silent=True) or {}
        term = body.get("term")
        if not isinstance(term, str):
            return jsonify({"error": "term must be a string"}), 400
        session = _session()
        session.on_search_term_changed(term)
        return jsonify(session.snapshot())

    @app.route("/api/search", methods=["POST"])
    async def submit_search():
        """Submit the live search term."""
        session = _session()
        try:
            await session.on_search_submitted()
        except EmptySearchTermError as exc:
            return jsonify({"error": str(exc)}), 400
        return jsonify(session.snapshot())

    return app


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    settings = Settings()
    app = create_app(settings)
    try:
        app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
    finally:
        app.extensions[SESSION_KEY].close()
