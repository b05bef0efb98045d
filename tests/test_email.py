import asyncio
import json

import httpx
import pytest

from brandkeeper.core.notifications.email import (
    RESEND_API_URL,
    WELCOME_SUBJECT,
    EmailDeliveryError,
    build_welcome_email,
    send_email,
    send_welcome_email,
)
from brandkeeper.settings import Settings


def make_settings(**overrides) -> Settings:
    values = {"APP_URL": "https://brand.example.com", "RESEND_API_KEY": "", "APP_ENV": "development"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def resend_client(status_code=200, body=None, seen=None) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=body if body is not None else {"id": "msg_123"})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_welcome_email_contents():
    message = build_welcome_email("ana@example.com", "S3cr<t!", "Ana", make_settings())
    assert message.to == "ana@example.com"
    assert message.subject == WELCOME_SUBJECT
    assert "https://brand.example.com/login" in message.html
    assert "S3cr&lt;t!" in message.html
    assert "S3cr<t!" in message.text
    assert "Hola Ana," in message.text


def test_welcome_email_falls_back_to_local_part():
    message = build_welcome_email("ana.perez@example.com", "x", None, make_settings())
    assert "Hola ana.perez," in message.text


def test_send_email_posts_to_resend():
    seen = []
    settings = make_settings(RESEND_API_KEY="re_test_key")
    message = build_welcome_email("ana@example.com", "pw", "Ana", settings)

    message_id = asyncio.run(send_email(message, settings, resend_client(seen=seen)))

    assert message_id == "msg_123"
    request = seen[0]
    assert str(request.url) == RESEND_API_URL
    assert request.headers["Authorization"] == "Bearer re_test_key"
    payload = json.loads(request.content)
    assert payload["to"] == ["ana@example.com"]
    assert payload["subject"] == WELCOME_SUBJECT


def test_send_email_rejects_malformed_key():
    settings = make_settings(RESEND_API_KEY="sk_wrong")
    message = build_welcome_email("ana@example.com", "pw", "Ana", settings)
    with pytest.raises(EmailDeliveryError) as exc:
        asyncio.run(send_email(message, settings, resend_client()))
    assert "re_" in exc.value.message


def test_send_email_explains_testing_restriction():
    settings = make_settings(RESEND_API_KEY="re_test_key")
    message = build_welcome_email("ana@example.com", "pw", "Ana", settings)
    client = resend_client(403, {"message": "You can only send testing emails to your own email address"})
    with pytest.raises(EmailDeliveryError) as exc:
        asyncio.run(send_email(message, settings, client))
    assert "verifica un dominio" in exc.value.message
    assert exc.value.status_code == 502


@pytest.mark.parametrize("app_env", ["development", "production"])
def test_welcome_email_without_key_is_reported_as_failure(app_env, caplog):
    caplog.set_level("INFO")
    with pytest.raises(EmailDeliveryError) as exc:
        asyncio.run(send_welcome_email("ana@example.com", "top-secret", "Ana", make_settings(APP_ENV=app_env)))
    assert "RESEND_API_KEY" in exc.value.message
    assert "ana@example.com" in caplog.text
    assert "top-secret" not in caplog.text


def test_deliver_credentials_without_key_reports_not_sent(monkeypatch, user_factory):
    from brandkeeper.core.notifications import email as mailer
    from brandkeeper.core.users import service as users_service

    monkeypatch.setattr(mailer, "get_settings", make_settings)
    delivery = asyncio.run(users_service.deliver_credentials(user_factory(email="ana@example.com"), "pw"))
    assert delivery.email_sent is False
    assert "RESEND_API_KEY" in delivery.email_error
