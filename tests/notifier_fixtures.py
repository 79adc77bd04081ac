from __future__ import annotations

from contact_notifier.models import AppSettings, SmtpSettings, Submission, TransportKind


def make_settings(
    transport: TransportKind = TransportKind.SMTP,
    *,
    host: str = "email-smtp.eu-west-1.amazonaws.com",
    port: int = 587,
    username: str = "AKIAEXAMPLE",
    password: str = "secret",
    from_email: str = "owner@example.com",
    to_email: str = "owner@example.com",
) -> AppSettings:
    return AppSettings(
        transport=transport,
        smtp=SmtpSettings(
            host=host,
            port=port,
            username=username,
            password=password,
            from_email=from_email,
            to_email=to_email,
        ),
        timeout_sec=5.0,
        log_level="INFO",
        log_dir="logs",
        api_host="127.0.0.1",
        api_port=8080,
    )


def jane() -> Submission:
    return Submission(name="Jane", email="jane@x.com", message="Hi\nthere")
