from __future__ import annotations

import logging

from flask import Flask, jsonify

from src.logging_setup import configure_logging
from src.routes import sort_bp

configure_logging()

app = Flask(__name__)
app.register_blueprint(sort_bp)

logger = logging.getLogger(__name__)


@app.get("/api/health")
def health():
    return jsonify({"ok": True})


@app.errorhandler(404)
def not_found(_exc):
    return jsonify({"error": "not_found"}), 404


@app.errorhandler(405)
def method_not_allowed(_exc):
    return jsonify({"error": "method_not_allowed"}), 405


if __name__ == "__main__":
    logger.info("Starting development server")
    app.run(debug=True)
