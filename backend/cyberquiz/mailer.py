"""Certificate notification emails sent through the Resend HTTP API.

Email is best effort: failures are logged and reported in the returned
dict, never raised, so certificate issuance is never blocked by it.
"""

import logging
import os
from datetime import datetime
from html import escape

import httpx

from cyberquiz.models import Certificate

logger = logging.getLogger(__name__)

RESEND_API_URL = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
EMAIL_FROM = os.getenv("EMAIL_FROM", "Cyber Quiz <onboarding@resend.dev>")

DIFFICULTY_COLORS = {"easy": "#4ade80", "medium": "#facc15", "hard": "#f87171"}

EMAIL_TEMPLATE = """<!DOCTYPE html>
<html>
<body style="font-family: 'Segoe UI', Tahoma, sans-serif; background: #0f172a; color: #e2e8f0; margin: 0; padding: 0;">
  <div style="max-width: 600px; margin: 0 auto; padding: 40px 20px;">
    <div style="background: #1e293b; border: 1px solid rgba(6, 182, 212, 0.3); border-radius: 16px; padding: 40px; text-align: center;">
      <h1 style="color: #22d3ee;">Congratulations, {username}!</h1>
      <p style="color: #94a3b8;">You've successfully passed the {site_name}!</p>
      <div style="font-size: 48px; font-weight: bold; color: #22d3ee;">{percentage}%</div>
      <div style="color: #94a3b8;">{score} out of {total} correct</div>
      <div style="color: #94a3b8;">Difficulty: <span style="color: {color}; font-weight: bold;">{difficulty}</span></div>
      <p>Your certificate has been issued and is ready for download.</p>
      <div style="color: #f59e0b; font-family: monospace;">Certificate ID: {certificate_id}</div>
      <a href="{verify_url}" style="display: inline-block; background: #f59e0b; color: #0f172a; padding: 14px 32px; border-radius: 8px; text-decoration: none; font-weight: bold;">Verify Your Certificate</a>
      <p style="color: #64748b; font-size: 12px;">
        This certificate can be verified at any time using the link above.<br/>
        {site_name} &bull; {year}
      </p>
    </div>
  </div>
</body>
</html>
"""


def verify_url_for(base_url: str, certificate_id: str) -> str:
    return f"{base_url.rstrip('/')}/{certificate_id}"


def render_certificate_email(
    certificate: Certificate, verify_url: str, site_name: str
) -> str:
    return EMAIL_TEMPLATE.format(
        username=escape(certificate.username),
        site_name=escape(site_name),
        percentage=certificate.percentage,
        score=certificate.score,
        total=certificate.total_questions,
        color=DIFFICULTY_COLORS.get(certificate.difficulty, "#22d3ee"),
        difficulty=escape(certificate.difficulty.capitalize()),
        certificate_id=escape(certificate.certificate_id),
        verify_url=escape(verify_url),
        year=datetime.utcnow().year,
    )


async def send_certificate_email(
    user_email: str,
    certificate: Certificate,
    verify_base_url: str,
    site_name: str = "Cyber Awareness Quiz",
    client: httpx.AsyncClient | None = None,
) -> dict:
    """Ask the email service to deliver the certificate notification."""
    api_key = os.getenv("RESEND_API_KEY")
    if not api_key:
        logger.info("RESEND_API_KEY not configured, skipping certificate email")
        return {"success": True, "skipped": True}

    verify_url = verify_url_for(verify_base_url, certificate.certificate_id)
    payload = {
        "from": EMAIL_FROM,
        "to": [user_email],
        "subject": (
            f"Congratulations {certificate.username}! "
            f"You Passed the {site_name}!"
        ),
        "html": render_certificate_email(certificate, verify_url, site_name),
    }
    headers = {"Authorization": f"Bearer {api_key}"}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=10.0) as own_client:
                resp = await own_client.post(RESEND_API_URL, json=payload, headers=headers)
        else:
            resp = await client.post(RESEND_API_URL, json=payload, headers=headers)
    except httpx.HTTPError as exc:
        logger.error(
            "Certificate email for %s could not be sent: %s",
            certificate.certificate_id,
            exc,
        )
        return {"success": False, "error": "Email service unavailable"}

    if resp.status_code >= 400:
        logger.error(
            "Email service rejected certificate %s: %s %s",
            certificate.certificate_id,
            resp.status_code,
            resp.text,
        )
        return {"success": False, "error": "Failed to send email"}

    try:
        email_id = resp.json().get("id")
    except ValueError:
        # Accepted by the service; only the receipt is unreadable.
        logger.warning(
            "Email service accepted certificate %s with an unreadable body: %r",
            certificate.certificate_id,
            resp.text[:200],
        )
        email_id = None
    logger.info(
        "Certificate email %s sent for certificate %s",
        email_id,
        certificate.certificate_id,
    )
    return {"success": True, "email_id": email_id}
