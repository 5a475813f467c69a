import asyncio
from types import SimpleNamespace

import httpx

from course_api.services import email_service, revalidation_service

MESSAGE = SimpleNamespace(
    name="Paul", email="paul@traine-savates.ch", subject="Dossard <perdu>", message="Bonjour"
)


def test_revalidation_skipped_without_frontend(monkeypatch):
    monkeypatch.setenv("FRONTEND_URL", "")
    assert asyncio.run(revalidation_service.revalidate_sponsors()) is False


def test_revalidation_posts_paths(monkeypatch):
    monkeypatch.setenv("FRONTEND_URL", "https://traine-savates.ch/")
    monkeypatch.setenv("REVALIDATE_SECRET", "secret")
    sent = {}

    async def fake_post(self, url, json=None, **kwargs):
        sent.update(url=url, json=json)
        return httpx.Response(200, json={"revalidated": True})

    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)

    assert asyncio.run(revalidation_service.revalidate_editions("2025")) is True
    assert sent["url"] == "https://traine-savates.ch/api/revalidate"
    assert sent["json"]["secret"] == "secret"
    assert "/editions/2025" in sent["json"]["paths"]


def test_revalidation_network_error_is_swallowed(monkeypatch):
    monkeypatch.setenv("FRONTEND_URL", "https://traine-savates.ch")

    async def failing_post(self, url, json=None, **kwargs):
        raise httpx.ConnectError("refus")

    monkeypatch.setattr(httpx.AsyncClient, "post", failing_post)
    assert asyncio.run(revalidation_service.revalidate_club()) is False


def test_contact_notification_needs_api_key(monkeypatch):
    monkeypatch.delenv("RESEND_API_KEY", raising=False)
    assert asyncio.run(email_service.send_contact_notification(MESSAGE, ["comite@traine-savates.ch"])) is False


def test_contact_notification_is_sent(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    sent = []

    def fake_send(params):
        sent.append(params)
        return {"id": "email-1"}

    monkeypatch.setattr("resend.Emails.send", fake_send)

    assert asyncio.run(email_service.send_contact_notification(MESSAGE, ["comite@traine-savates.ch"])) is True
    assert sent[0]["to"] == ["comite@traine-savates.ch"]
    assert sent[0]["reply_to"] == ["paul@traine-savates.ch"]
    assert "Dossard &lt;perdu&gt;" in sent[0]["html"]


def test_notification_without_recipients(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    monkeypatch.setenv("NOTIFICATION_EMAILS", "")
    assert asyncio.run(email_service.send_contact_notification(MESSAGE)) is False
