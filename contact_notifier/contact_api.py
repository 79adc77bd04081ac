from __future__ import annotations

import asyncio
import json
import logging
from http import HTTPStatus
from wsgiref.simple_server import make_server

from contact_notifier.models import Submission
from contact_notifier.notifier import ContactNotifier

logger = logging.getLogger(__name__)


def run_api_server(host: str, port: int, notifier: ContactNotifier) -> None:
    with make_server(host, port, make_app(notifier)) as server:
        logger.info("contact-api listening on http://%s:%s", host, port)
        server.serve_forever()


def make_app(notifier: ContactNotifier):  # type: ignore[no-untyped-def]
    def app(environ: dict, start_response):  # type: ignore[no-untyped-def]
        method = environ.get("REQUEST_METHOD", "GET")
        path = environ.get("PATH_INFO", "")
        try:
            if method == "GET" and path == "/api/v1/health":
                return _json(
                    start_response,
                    HTTPStatus.OK,
                    {"status": "ok", "transport": notifier.transport.value},
                )

            if method == "POST" and path == "/api/v1/contact":
                payload = _read_json(environ)
                submission = parse_submission(payload)
                delivered = asyncio.run(notifier.notify(submission))
                if not delivered:
                    return _json(
                        start_response,
                        HTTPStatus.BAD_GATEWAY,
                        {"success": False, "error": "DELIVERY_FAILED"},
                    )
                return _json(start_response, HTTPStatus.OK, {"success": True})

            return _json(start_response, HTTPStatus.NOT_FOUND, {"error": "NOT_FOUND"})
        except ValueError as exc:
            return _json(
                start_response,
                HTTPStatus.BAD_REQUEST,
                {"success": False, "error": "VALIDATION_ERROR", "message": str(exc)},
            )
        except Exception as exc:  # pragma: no cover
            logger.exception("contact-api request failed method=%s path=%s", method, path)
            return _json(
                start_response,
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"error": "INTERNAL_ERROR", "message": str(exc)},
            )

    return app


def parse_submission(payload: dict) -> Submission:
    name = _require_str(payload, "name")
    email = _require_str(payload, "email")
    message = _require_str(payload, "message")
    if "@" not in email:
        raise ValueError("invalid 'email': expected an email address")
    return Submission(name=name, email=email, message=message)


def _read_json(environ: dict) -> dict:
    body_size = int(environ.get("CONTENT_LENGTH", "0") or "0")
    body = environ["wsgi.input"].read(body_size) if body_size > 0 else b"{}"
    payload = json.loads(body.decode("utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("request body must be JSON object")
    return payload


def _json(start_response, status: HTTPStatus, payload: dict):  # type: ignore[no-untyped-def]
    body = json.dumps(payload, ensure_ascii=True).encode("utf-8")
    start_response(
        f"{status.value} {status.phrase}",
        [("Content-Type", "application/json; charset=utf-8"), ("Content-Length", str(len(body)))],
    )
    return [body]


def _require_str(payload: dict, key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"invalid '{key}': expected non-empty string")
    return value
