"""
Transactional email delivered through the Resend HTTP API.

Without ``RESEND_API_KEY`` nothing is sent in any environment and the caller
gets an ``EmailDeliveryError``, so a missing key never looks like a delivered
email.
"""
import html
import logging
from dataclasses import dataclass

import httpx

from brandkeeper.core.errors import UpstreamFailure
from brandkeeper.settings import Settings, get_settings

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
WELCOME_SUBJECT = "Bienvenido a Brand Keeper - Credenciales de acceso"

_WELCOME_HTML = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Bienvenido a Brand Keeper</title>
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background-color: #212726; padding: 30px; border-radius: 8px 8px 0 0; text-align: center;">
    <img src="{logo_url}" alt="Brand Keeper" width="200" style="max-width: 200px; height: auto; display: block; margin: 0 auto 20px; border: 0;" />
    <h1 style="color: #bcf352; margin: 0; font-size: 28px;">¡Bienvenido a Brand Keeper!</h1>
  </div>
  <div style="background-color: #f8f9fa; padding: 30px; border-radius: 0 0 8px 8px; margin-bottom: 20px;">
    <p>Hola {user_name},</p>
    <p>Tu cuenta ha sido creada en Brand Keeper. Estas son tus credenciales de acceso:</p>
  </div>
  <div style="background-color: #ffffff; border: 2px solid #e5e7eb; border-radius: 8px; padding: 20px; margin-bottom: 20px;">
    <h2 style="color: #1f2937; margin-top: 0;">Credenciales de acceso</h2>
    <p><strong>Correo electrónico:</strong> {email}</p>
    <p><strong>Contraseña temporal:</strong> <code style="background-color: #f3f4f6; padding: 4px 8px; border-radius: 4px; font-family: monospace;">{password}</code></p>
    <p style="color: #dc2626; font-size: 14px;">Cambia esta contraseña después de tu primer inicio de sesión.</p>
  </div>
  <div style="text-align: center; margin: 30px 0;">
    <a href="{login_url}" style="display: inline-block; background-color: #bcf352; color: #212726; padding: 12px 30px; text-decoration: none; border-radius: 6px; font-weight: bold;">Iniciar sesión</a>
  </div>
  <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb; font-size: 12px; color: #9ca3af; text-align: center;">
    <p>Este es un correo automático, por favor no respondas a este mensaje.</p>
    <p>Si no solicitaste esta cuenta, contacta al administrador del sistema.</p>
  </div>
</body>
</html>
"""

_WELCOME_TEXT = """¡Bienvenido a Brand Keeper!

Hola {user_name},

Tu cuenta ha sido creada en Brand Keeper. Estas son tus credenciales de acceso:

- Correo electrónico: {email}
- Contraseña temporal: {password}

Cambia esta contraseña después de tu primer inicio de sesión.

Acceso: {login_url}

Este es un correo automático, por favor no respondas a este mensaje.
"""


class EmailDeliveryError(UpstreamFailure):
    default_message = "No se pudo enviar el correo"


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str
    text: str


def build_welcome_email(email: str, password: str, full_name: str | None, settings: Settings) -> EmailMessage:
    app_url = settings.APP_URL.rstrip("/")
    login_url = f"{app_url}/login"
    logo_url = settings.EMAIL_LOGO_URL or f"{app_url}/images/LOGO_CORE_LOGIN.png"
    user_name = full_name or email.split("@")[0]

    return EmailMessage(
        to=email,
        subject=WELCOME_SUBJECT,
        html=_WELCOME_HTML.format(
            logo_url=html.escape(logo_url, quote=True),
            user_name=html.escape(user_name),
            email=html.escape(email),
            password=html.escape(password),
            login_url=html.escape(login_url, quote=True),
        ),
        text=_WELCOME_TEXT.format(user_name=user_name, email=email, password=password, login_url=login_url),
    )


def _describe_resend_error(status_code: int, message: str) -> str:
    if status_code == 401 or "API key is invalid" in message:
        return "La API key de Resend no es válida"
    if "can only send testing emails" in message:
        return "Resend solo permite enviar correos de prueba a tu propia dirección; verifica un dominio y actualiza RESEND_FROM_EMAIL"
    if "not verified" in message:
        return "El dominio del remitente no está verificado en Resend"
    return f"Error al enviar correo: {message}"


async def send_email(message: EmailMessage, settings: Settings, client: httpx.AsyncClient | None = None) -> str:
    """Send through Resend and return the provider's message id."""
    api_key = settings.RESEND_API_KEY.strip()
    if not api_key.startswith("re_"):
        raise EmailDeliveryError('La API key de Resend debe comenzar con "re_"')

    payload = {
        "from": settings.RESEND_FROM_EMAIL,
        "to": [message.to],
        "subject": message.subject,
        "html": message.html,
        "text": message.text,
    }
    headers = {"Authorization": f"Bearer {api_key}"}

    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=10.0)
    try:
        response = await client.post(RESEND_API_URL, json=payload, headers=headers)
    except httpx.RequestError as exc:
        logger.error("Resend request failed: %s", exc)
        raise EmailDeliveryError(f"Error al enviar correo: {exc}")
    finally:
        if owns_client:
            await client.aclose()

    try:
        body = response.json()
    except ValueError:
        body = {}

    if response.status_code >= 400:
        reason = body.get("message") or response.text or "Error desconocido"
        logger.error("Resend rejected email to %s (%s): %s", message.to, response.status_code, reason)
        raise EmailDeliveryError(_describe_resend_error(response.status_code, reason))

    message_id = body.get("id")
    if not message_id:
        raise EmailDeliveryError("Respuesta inválida del servicio de correo")

    logger.info("Email sent to %s (id %s)", message.to, message_id)
    return message_id


async def send_welcome_email(
    email: str,
    password: str,
    full_name: str | None = None,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> None:
    settings = settings or get_settings()
    message = build_welcome_email(email, password, full_name, settings)

    if settings.RESEND_API_KEY:
        await send_email(message, settings, client)
        return

    logger.warning("RESEND_API_KEY not set; cannot send welcome email to %s", email)
    raise EmailDeliveryError(f"No se pudo enviar correo a {email}. RESEND_API_KEY no está configurado.")
