from __future__ import annotations

import io
import json
import unittest
from unittest.mock import AsyncMock, patch

from contact_notifier.contact_api import make_app
from contact_notifier.models import Submission, TransportKind
from contact_notifier.notifier import ContactNotifier
from notifier_fixtures import make_settings


class ContactApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.notifier = ContactNotifier(make_settings(TransportKind.RELAY))

    def test_health_reports_transport(self) -> None:
        status, body = _call(self.notifier, "GET", "/api/v1/health")
        self.assertEqual(status, 200)
        self.assertEqual(body, {"status": "ok", "transport": "relay"})

    def test_post_contact_delivers_submission(self) -> None:
        with patch.object(ContactNotifier, "notify", new=AsyncMock(return_value=True)) as notify:
            status, body = _call(
                self.notifier,
                "POST",
                "/api/v1/contact",
                payload={"name": "Jane", "email": "jane@x.com", "message": "Hi\nthere"},
            )
        self.assertEqual(status, 200)
        self.assertEqual(body, {"success": True})
        notify.assert_awaited_once_with(Submission(name="Jane", email="jane@x.com", message="Hi\nthere"))

    def test_post_contact_reports_delivery_failure(self) -> None:
        with patch.object(ContactNotifier, "notify", new=AsyncMock(return_value=False)):
            status, body = _call(
                self.notifier,
                "POST",
                "/api/v1/contact",
                payload={"name": "Jane", "email": "jane@x.com", "message": "Hi"},
            )
        self.assertEqual(status, 502)
        self.assertEqual(body["error"], "DELIVERY_FAILED")
        self.assertFalse(body["success"])

    def test_post_contact_validates_payload(self) -> None:
        cases = [
            {"email": "jane@x.com", "message": "Hi"},
            {"name": "Jane", "email": "not-an-email", "message": "Hi"},
            {"name": "Jane", "email": "jane@x.com", "message": "   "},
            {"name": 42, "email": "jane@x.com", "message": "Hi"},
        ]
        for payload in cases:
            with patch.object(ContactNotifier, "notify", new=AsyncMock(return_value=True)) as notify:
                status, body = _call(self.notifier, "POST", "/api/v1/contact", payload=payload)
            self.assertEqual(status, 400, payload)
            self.assertEqual(body["error"], "VALIDATION_ERROR")
            notify.assert_not_awaited()

    def test_invalid_json_is_bad_request(self) -> None:
        status, body = _call(self.notifier, "POST", "/api/v1/contact", raw=b"{not json")
        self.assertEqual(status, 400)
        self.assertEqual(body["error"], "VALIDATION_ERROR")

    def test_unknown_route(self) -> None:
        status, body = _call(self.notifier, "GET", "/api/v1/nope")
        self.assertEqual(status, 404)
        self.assertEqual(body["error"], "NOT_FOUND")


def _call(
    notifier: ContactNotifier,
    method: str,
    path: str,
    *,
    payload: dict | None = None,
    raw: bytes | None = None,
) -> tuple[int, dict]:
    body_bytes = raw if raw is not None else json.dumps(payload or {}).encode("utf-8")
    environ = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "CONTENT_LENGTH": str(len(body_bytes)),
        "wsgi.input": io.BytesIO(body_bytes),
    }
    response_status: dict[str, str] = {}

    def start_response(status: str, headers):  # type: ignore[no-untyped-def]
        response_status["status"] = status

    chunks = make_app(notifier)(environ, start_response)
    body = b"".join(chunks).decode("utf-8")
    status_code = int(response_status["status"].split(" ", 1)[0])
    return status_code, json.loads(body)


if __name__ == "__main__":
    unittest.main()
