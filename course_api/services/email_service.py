"""
Notifications email du comité via Resend.
Documentation : https://resend.com/docs

Envoi au mieux : un échec est journalisé, jamais propagé au formulaire.
"""
import logging
import os
from html import escape
from typing import List, Optional

import resend

from ..config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_FROM_EMAIL = "Traîne-Savates <notifications@traine-savates.ch>"


def _get_resend_api_key() -> Optional[str]:
    return os.getenv("RESEND_API_KEY")


def _get_from_email() -> str:
    return os.getenv("RESEND_FROM_EMAIL", DEFAULT_FROM_EMAIL)


def is_email_service_configured() -> bool:
    """Vrai si la clé Resend est définie."""
    if not _get_resend_api_key():
        logger.warning("RESEND_API_KEY non configurée dans les variables d'environnement")
        return False
    return True


def _rows_html(rows: list[tuple[str, Optional[str]]]) -> str:
    return "".join(
        f'<tr><td style="padding: 6px 0; color: #6b7280;">{escape(label)}</td>'
        f'<td style="padding: 6px 0; font-weight: 600;">{escape(str(value)) if value else "Non renseigné"}</td></tr>'
        for label, value in rows
    )


def _render(title: str, rows: list[tuple[str, Optional[str]]], body: Optional[str]) -> str:
    message_block = ""
    if body:
        message_block = f"""
                <h3 style="margin: 0 0 8px 0; color: #111827;">Message</h3>
                <div style="padding: 12px; background: #f3f4f6; border-radius: 8px; color: #374151; white-space: pre-wrap;">{escape(body)}</div>
        """
    return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <meta name="viewport" content="width=device-width, initial-scale=1.0">
        </head>
        <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #1f2937; max-width: 640px; margin: 0 auto; padding: 24px; background: #f9fafb;">
            <div style="background: #14532d; color: white; padding: 20px; border-radius: 12px 12px 0 0; text-align: center;">
                <h1 style="margin: 0; font-size: 20px;">{escape(title)}</h1>
            </div>
            <div style="background: white; padding: 24px; border: 1px solid #e5e7eb; border-top: none; border-radius: 0 0 12px 12px;">
                <table style="width: 100%; border-collapse: collapse; margin-bottom: 16px;">
                    {_rows_html(rows)}
                </table>
                {message_block}
            </div>
            <p style="text-align: center; color: #9ca3af; font-size: 12px; margin-top: 12px;">Course des Traîne-Savates</p>
        </body>
        </html>
        """


def _send(subject: str, html_content: str, reply_to: Optional[str], recipients: List[str]) -> bool:
    if not is_email_service_configured():
        logger.warning("Service email non configuré, aucune notification envoyée")
        return False
    if not recipients:
        logger.warning("Aucun destinataire configuré dans NOTIFICATION_EMAILS")
        return False

    try:
        resend.api_key = _get_resend_api_key()
        params = {
            "from": _get_from_email(),
            "to": recipients,
            "subject": subject,
            "html": html_content,
        }
        if reply_to:
            params["reply_to"] = [reply_to]
        response = resend.Emails.send(params)
        logger.info(f"Notification envoyée à {len(recipients)} destinataires. ID: {response.get('id', 'N/A')}")
        return True
    except Exception as e:
        logger.error(f"Erreur lors de l'envoi de la notification : {str(e)}", exc_info=True)
        return False


async def send_contact_notification(message, recipients: Optional[List[str]] = None) -> bool:
    """
    Transmet un message du formulaire de contact au comité.
    L'email de l'expéditeur sert de Reply-To pour répondre directement.
    """
    recipients = recipients if recipients is not None else get_settings().notification_emails
    html_content = _render(
        "Nouveau message de contact",
        [("Nom", message.name), ("Email", message.email), ("Sujet", message.subject)],
        message.message,
    )
    return _send(f"Contact : {message.subject}", html_content, message.email, recipients)


async def send_membership_notification(request, recipients: Optional[List[str]] = None) -> bool:
    """Signale une nouvelle demande d'adhésion au comité."""
    recipients = recipients if recipients is not None else get_settings().notification_emails
    full_name = f"{request.first_name} {request.last_name}"
    html_content = _render(
        "Nouvelle demande d'adhésion",
        [
            ("Nom", full_name),
            ("Email", request.email),
            ("Téléphone", request.phone),
            ("Date de naissance", request.birth_date.isoformat() if request.birth_date else None),
            ("Adresse", request.address),
            ("Localité", " ".join(p for p in (request.postal_code, request.city) if p) or None),
            ("Groupe", request.membership_type),
        ],
        request.message,
    )
    return _send(f"Adhésion : {full_name}", html_content, request.email, recipients)
