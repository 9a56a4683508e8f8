#!/usr/bin/env python3
"""
Flask web application serving ranked search over a loaded index.

Endpoints:
    POST /api/search   {"query": "...", "limit": 10}  -> ranked results
    GET  /health                                      -> index status
"""

import json
import logging

from flask import Flask, current_app, jsonify, request

from docsearch.config import DEFAULT_LIMIT
from docsearch.service import QueryService

logger = logging.getLogger(__name__)


def _read_query(data):
    """
    Accept {"query": ..., "limit": ...} or a bare JSON string.
    The string may itself be JSON-encoded {"query": ...} (what the browser
    client sends). Returns (query, limit) or raises ValueError.
    """
    if isinstance(data, str):
        try:
            inner = json.loads(data)
        except ValueError:
            return data, DEFAULT_LIMIT
        if isinstance(inner, dict):
            data = inner
        else:
            data = {"query": inner if isinstance(inner, str) else data}

    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object or string")

    query = data.get("query", "")
    if not isinstance(query, str):
        raise ValueError("'query' must be a string")

    limit = data.get("limit", DEFAULT_LIMIT)
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
        raise ValueError("'limit' must be a non-negative integer or null")
    return query, limit


def create_app(service: QueryService) -> Flask:
    app = Flask(__name__)
    app.config["SEARCH_SERVICE"] = service

    @app.route("/api/search", methods=["POST"])
    def search():
        """Handle search requests."""
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({"error": "Request body must be JSON"}), 400
        try:
            query, limit = _read_query(data)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        svc = current_app.config["SEARCH_SERVICE"]
        resp = svc.search(query.strip(), limit=limit)
        logger.info(
            "[App] query=%r hits=%d/%d in %.2fms",
            resp.query, len(resp.hits), resp.total, resp.elapsed_ms,
        )
        return jsonify(resp.to_dict())

    @app.route("/health")
    def health():
        """Health check endpoint."""
        snapshot = current_app.config["SEARCH_SERVICE"].snapshot
        loaded = len(snapshot) > 0
        return jsonify({
            "status": "healthy" if loaded else "empty",
            "indexLoaded": loaded,
            "index": snapshot.source,
            "documents": len(snapshot),
        })

    return app
