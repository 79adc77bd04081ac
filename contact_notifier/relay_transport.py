from __future__ import annotations

import json
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, build_opener

from contact_notifier.errors import NotifyError, classify_untyped_error
from contact_notifier.models import ErrorCode, Submission

RELAY_ENDPOINT_URL = "https://mailer.example.com/api/contact"
SITE_ORIGIN = "https://www.example.com"


def post_to_relay(submission: Submission, timeout_sec: float) -> dict[str, Any]:
    """Forward ``submission`` to the relay endpoint and return its JSON reply.

    Raises NotifyError unless the relay answered 2xx with ``{"success": true}``.
    """
    req = build_relay_request(submission)
    opener = build_opener()
    try:
        with opener.open(req, timeout=timeout_sec) as response:  # type: ignore[arg-type]
            status = int(getattr(response, "status", 200))
            body = response.read()
    except HTTPError as exc:
        raise NotifyError(ErrorCode.HTTP_STATUS, f"Relay responded with HTTP {exc.code}") from exc
    except URLError as exc:
        code = ErrorCode.TIMEOUT if isinstance(exc.reason, TimeoutError) else ErrorCode.CONNECTION
        raise NotifyError(code, f"Relay request failed: {exc.reason}") from exc
    except Exception as exc:  # noqa: BLE001
        raise NotifyError(classify_untyped_error(exc), f"Relay request failed: {exc}") from exc

    if not 200 <= status < 300:
        raise NotifyError(ErrorCode.HTTP_STATUS, f"Relay responded with HTTP {status}")

    payload = parse_relay_response(body)
    if payload.get("success") is not True:
        detail = payload.get("message") or payload.get("error") or "no detail"
        raise NotifyError(ErrorCode.EXPLICIT_FAILURE, f"Relay reported failure: {detail}")
    return payload


def build_relay_request(submission: Submission) -> Request:
    data = json.dumps(submission.to_dict(), ensure_ascii=False).encode("utf-8")
    return Request(
        RELAY_ENDPOINT_URL,
        data=data,
        method="POST",
        headers={
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Origin": SITE_ORIGIN,
        },
    )


def parse_relay_response(body: bytes) -> dict[str, Any]:
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise NotifyError(ErrorCode.MALFORMED_RESPONSE, f"Relay response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise NotifyError(ErrorCode.MALFORMED_RESPONSE, "Relay response must be a JSON object")
    return payload
