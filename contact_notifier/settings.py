from __future__ import annotations

import os

from dotenv import load_dotenv

from contact_notifier.models import AppSettings, SmtpSettings, TransportKind


def load_settings() -> AppSettings:
    load_dotenv()
    from_email = os.getenv("AWS_SES_FROM_EMAIL", "")
    return AppSettings(
        transport=_parse_transport(os.getenv("CONTACT_TRANSPORT", TransportKind.SMTP.value)),
        smtp=SmtpSettings(
            host=os.getenv("AWS_SES_SMTP_HOST", ""),
            port=int(os.getenv("AWS_SES_SMTP_PORT") or "587"),
            username=os.getenv("AWS_SES_SMTP_USERNAME", ""),
            password=os.getenv("AWS_SES_SMTP_PASSWORD", ""),
            from_email=from_email,
            to_email=os.getenv("CONTACT_TO_EMAIL") or from_email,
        ),
        timeout_sec=float(os.getenv("NOTIFY_TIMEOUT_SEC", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        api_host=os.getenv("API_HOST", "127.0.0.1"),
        api_port=int(os.getenv("API_PORT", "8080")),
    )


def _parse_transport(raw: str) -> TransportKind:
    value = raw.strip().lower()
    try:
        return TransportKind(value)
    except ValueError:
        allowed = ", ".join(kind.value for kind in TransportKind)
        msg = f"Invalid CONTACT_TRANSPORT: {raw!r} (expected one of: {allowed})"
        raise ValueError(msg) from None
