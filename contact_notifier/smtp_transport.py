from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage

from contact_notifier.errors import NotifyError, classify_untyped_error
from contact_notifier.models import ErrorCode, SmtpSettings

LOGGER = logging.getLogger(__name__)
IMPLICIT_TLS_PORT = 465


def send_via_smtp(message: EmailMessage, smtp: SmtpSettings, timeout_sec: float) -> str:
    """Submit ``message`` to the configured relay and return its Message-ID."""
    check_smtp_settings(smtp)
    try:
        with _open_connection(smtp, timeout_sec) as conn:
            if smtp.has_credentials():
                conn.login(smtp.username, smtp.password)
            conn.send_message(message)
    except NotifyError:
        raise
    except smtplib.SMTPAuthenticationError as exc:
        raise NotifyError(ErrorCode.AUTH, f"SMTP authentication failed: {exc}") from exc
    except smtplib.SMTPRecipientsRefused as exc:
        raise NotifyError(ErrorCode.REJECTED, f"SMTP recipients refused: {exc.recipients}") from exc
    except (smtplib.SMTPSenderRefused, smtplib.SMTPDataError) as exc:
        raise NotifyError(ErrorCode.REJECTED, f"SMTP relay rejected message: {exc}") from exc
    except Exception as exc:  # noqa: BLE001
        raise NotifyError(classify_untyped_error(exc), f"SMTP send failed: {exc}") from exc
    return str(message["Message-ID"] or "")


def check_smtp_settings(smtp: SmtpSettings) -> None:
    if not smtp.host:
        raise NotifyError(ErrorCode.CONFIG, "SMTP host is not configured")
    if not smtp.from_email or not smtp.to_email:
        raise NotifyError(ErrorCode.CONFIG, "SMTP from/to address is not configured")


def _open_connection(smtp: SmtpSettings, timeout_sec: float) -> smtplib.SMTP:
    context = ssl.create_default_context()
    if smtp.port == IMPLICIT_TLS_PORT:
        return smtplib.SMTP_SSL(smtp.host, smtp.port, timeout=timeout_sec, context=context)

    conn = smtplib.SMTP(smtp.host, smtp.port, timeout=timeout_sec)
    try:
        conn.ehlo()
        if conn.has_extn("starttls"):
            conn.starttls(context=context)
            conn.ehlo()
        else:
            LOGGER.warning("SMTP relay %s:%s does not offer STARTTLS", smtp.host, smtp.port)
    except Exception:
        conn.close()
        raise
    return conn
