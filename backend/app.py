import os
import logging
from typing import Optional

from flask import Flask, jsonify, request, render_template
from flask_cors import CORS
from dotenv import load_dotenv

from domain.constants import VALID_MOVES
from services.game_session import GameSession, INTENTS
from web import TEMPLATE_FOLDER

load_dotenv()

logging.basicConfig(level=logging.INFO)


def _allowed_origins():
    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        return [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    # sensible defaults for local dev
    return [
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


def create_app(session: Optional[GameSession] = None) -> Flask:
    """
    Build the Flask app serving one game.

    Args:
        session: the game to serve; a new one backed by the SQLite high
                 score store when omitted
    """
    app = Flask(__name__, template_folder=TEMPLATE_FOLDER)
    CORS(app, resources={r"/api/*": {"origins": _allowed_origins()}})

    if session is None:
        session = GameSession()
    app.extensions["game_session"] = session

    @app.route("/", methods=["GET"])
    def index():
        state = session.snapshot()
        return render_template("index.html", board_size=state.board_size)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """
        Get the current game snapshot.

        Returns phase, snake cells, food cell, score, high score and speed.
        """
        try:
            return jsonify(session.snapshot().to_dict())
        except Exception as error:
            logging.error(f"Error reading game state: {error}")
            return jsonify({"error": "Failed to read game state"}), 500

    @app.route("/api/keys", methods=["POST"])
    def press_key():
        """
        Apply a raw key press, e.g. {"key": "ArrowUp"}.

        Unbound keys are ignored. Returns the resulting snapshot.
        """
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or not isinstance(body.get("key"), str):
            return jsonify({"error": "Expected a JSON body like {\"key\": \"ArrowUp\"}"}), 400

        try:
            return jsonify(session.handle_key(body["key"]).to_dict())
        except Exception as error:
            logging.error(f"Error handling key {body['key']!r}: {error}")
            return jsonify({"error": "Failed to handle key"}), 500

    @app.route("/api/intents", methods=["POST"])
    def apply_intent():
        """
        Apply an intent, e.g. {"intent": "steer", "direction": "UP"}.

        Intents: start, restart, pause, resume, toggle_pause, steer.
        Intents that do not apply to the current phase are ignored.

        Returns:
        - 200: the resulting snapshot
        - 400: malformed body, unknown intent or direction
        """
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or "intent" not in body:
            return jsonify({"error": "Expected a JSON body with an 'intent' field"}), 400

        intent = body["intent"]
        direction = body.get("direction")
        if intent not in INTENTS:
            return jsonify({"error": f"Unknown intent {intent!r}"}), 400
        if intent == "steer" and (not isinstance(direction, str) or direction not in VALID_MOVES):
            return jsonify({"error": f"Unknown direction {direction!r}"}), 400

        try:
            return jsonify(session.dispatch(intent, direction).to_dict())
        except Exception as error:
            logging.error(f"Error applying intent {intent!r}: {error}")
            return jsonify({"error": "Failed to apply intent"}), 500

    return app


if __name__ == "__main__":
    # Run the Flask app; the reloader would start a second tick driver.
    create_app().run(debug=bool(os.getenv("FLASK_DEBUG")), use_reloader=False)
