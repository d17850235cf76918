"""HTTP sidecar server for fuzzy-censor.

Runs as a lightweight stdlib HTTP server on localhost so non-Python
services can share the same matching and censoring rules.

Endpoints:
    GET  /health          — Health check
    POST /transliterate   — {"text": ...}             -> {"text": ...}
    POST /distance        — {"source": ..., "target": ...} -> {"distance": n}
    POST /similarity      — {"source": ..., "target": ...} -> {"similarity": x}
    POST /censor          — {"text": ..., "spaced": bool}  -> {"text": ...}
    POST /censor-phone    — {"phone": ...}            -> {"phone": ...}
    POST /valid-phone     — {"phone": ...}            -> {"valid": bool}
    POST /same-phone      — {"first": ..., "second": ...} -> {"same": bool}
    POST /rank            — {"query": ..., "candidates": [...], "threshold": x, "limit": n}

All endpoints expect/return JSON.
"""

from __future__ import annotations
import json
import logging
import os
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any, Callable

from .config import create_toolkit, load_from_yaml
from .log import configure_logging
from .toolkit import Toolkit

logger = logging.getLogger(__name__)

DEFAULT_PORT = int(os.environ.get("FUZZY_CENSOR_PORT", "18792"))
DEFAULT_CONFIG = os.environ.get("FUZZY_CENSOR_CONFIG", "")


class BadRequest(ValueError):
    """Client sent a body the endpoint cannot use."""


def _field(body: dict[str, Any], name: str, *, kind: type = str, required: bool = True) -> Any:
    value = body.get(name)
    if value is None:
        if required:
            raise BadRequest(f"missing field: {name}")
        return None
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise BadRequest(f"field {name} must be {kind.__name__}")
    return value


def _rank(toolkit: Toolkit, body: dict[str, Any]) -> dict[str, Any]:
    candidates = _field(body, "candidates", kind=list)
    if not all(isinstance(c, str) for c in candidates):
        raise BadRequest("field candidates must be a list of strings")
    threshold = body.get("threshold")
    if threshold is not None and (isinstance(threshold, bool) or not isinstance(threshold, (int, float))):
        raise BadRequest("field threshold must be a number")
    limit = _field(body, "limit", kind=int, required=False)
    if limit is not None and limit < 0:
        raise BadRequest("field limit must be non-negative")
    ranked = toolkit.rank(_field(body, "query"), candidates, threshold=threshold, limit=limit)
    return {"matches": [{"candidate": c, "score": s} for c, s in ranked]}


_ROUTES: dict[str, Callable[[Toolkit, dict[str, Any]], dict[str, Any]]] = {
    "/transliterate": lambda t, b: {"text": t.transliterate(_field(b, "text"))},
    "/distance": lambda t, b: {"distance": t.edit_distance(_field(b, "source"), _field(b, "target"))},
    "/similarity": lambda t, b: {"similarity": t.similarity(_field(b, "source"), _field(b, "target"))},
    "/censor": lambda t, b: {"text": t.censor_text(_field(b, "text"), _field(b, "spaced", kind=bool, required=False))},
    "/censor-phone": lambda t, b: {"phone": t.censor_phone(_field(b, "phone"))},
    "/valid-phone": lambda t, b: {"valid": t.is_valid_phone_number(_field(b, "phone", required=False))},
    "/same-phone": lambda t, b: {"same": t.same_phone_numbers(_field(b, "first"), _field(b, "second"))},
    "/rank": _rank,
}


def dispatch(toolkit: Toolkit, path: str, body: Any) -> tuple[int, dict[str, Any]]:
    """Route a POST body to a toolkit operation. Returns (status, payload)."""
    handler = _ROUTES.get(path)
    if handler is None:
        return 404, {"error": "not found"}
    if not isinstance(body, dict):
        return 400, {"error": "body must be a JSON object"}
    try:
        return 200, handler(toolkit, body)
    except BadRequest as e:
        return 400, {"error": str(e)}


class FuzzyCensorHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the fuzzy-censor sidecar."""

    toolkit: Toolkit = Toolkit()

    def _read_json(self) -> Any:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8")
        return json.loads(body) if body else {}

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.info(format, *args, extra={"extra_data": {"route": getattr(self, "path", ""), "client": self.client_address[0]}})

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok"})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            body = self._read_json()
        except (ValueError, UnicodeDecodeError) as e:
            self._respond(400, {"error": f"invalid JSON: {e}"})
            return

        try:
            status, payload = dispatch(self.toolkit, self.path, body)
        except Exception as e:
            logger.exception("unhandled error on %s", self.path)
            status, payload = 500, {"error": str(e)}
        if status != 200:
            logger.info("request rejected", extra={"extra_data": {"route": self.path, "status": status}})
        self._respond(status, payload)


def serve(port: int = DEFAULT_PORT, toolkit: Toolkit | None = None) -> None:
    """Start the fuzzy-censor HTTP sidecar."""
    FuzzyCensorHandler.toolkit = toolkit or Toolkit()

    server = HTTPServer(("127.0.0.1", port), FuzzyCensorHandler)
    logger.info("fuzzy-censor sidecar listening on http://127.0.0.1:%d", port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="fuzzy-censor HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()
    configure_logging(args.log_level)
    config = load_from_yaml(args.config) if args.config else {}
    serve(port=args.port, toolkit=create_toolkit(config))
