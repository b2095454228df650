"""Tests for the certificate notification email."""

import asyncio
import json
import pathlib
import sys
from datetime import datetime

import httpx

# Allow importing the cyberquiz package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from cyberquiz.mailer import send_certificate_email, verify_url_for
from cyberquiz.models import Certificate


def _certificate():
    return Certificate(
        certificate_id="ABC123",
        user_id=1,
        attempt_id="attempt",
        username="alice",
        score=9,
        total_questions=10,
        percentage=90,
        difficulty="hard",
        issued_at=datetime(2024, 3, 1),
    )


def test_email_skipped_without_api_key(monkeypatch):
    monkeypatch.delenv("RESEND_API_KEY", raising=False)
    result = asyncio.run(
        send_certificate_email("alice@example.com", _certificate(), "https://quiz.test/verify")
    )
    assert result == {"success": True, "skipped": True}


def test_email_posted_to_service(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "test-key")
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email-1"})

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await send_certificate_email(
                "alice@example.com",
                _certificate(),
                "https://quiz.test/verify/",
                site_name="Cyber Awareness Quiz",
                client=client,
            )

    result = asyncio.run(run())
    assert result == {"success": True, "email_id": "email-1"}
    assert captured["auth"] == "Bearer test-key"
    body = captured["body"]
    assert body["to"] == ["alice@example.com"]
    assert "alice" in body["subject"]
    assert "ABC123" in body["html"]
    assert "https://quiz.test/verify/ABC123" in body["html"]
    assert "90%" in body["html"]


def test_email_failures_are_reported_not_raised(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "test-key")

    def rejecting(request):
        return httpx.Response(422, json={"message": "invalid from address"})

    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def run(handler):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await send_certificate_email(
                "alice@example.com", _certificate(), "https://quiz.test/verify", client=client
            )

    assert asyncio.run(run(rejecting))["success"] is False
    assert asyncio.run(run(unreachable))["success"] is False


def test_verify_url_joins_cleanly():
    assert verify_url_for("https://quiz.test/verify/", "X1") == "https://quiz.test/verify/X1"
    assert verify_url_for("https://quiz.test/verify", "X1") == "https://quiz.test/verify/X1"


def test_accepted_email_with_unreadable_body(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "test-key")

    def plain_text(request):
        return httpx.Response(200, text="OK")

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(plain_text)) as client:
            return await send_certificate_email(
                "alice@example.com", _certificate(), "https://quiz.test/verify", client=client
            )

    assert asyncio.run(run()) == {"success": True, "email_id": None}
