from __future__ import annotations

from email.message import EmailMessage
from email.utils import make_msgid
from html import escape

from contact_notifier.models import SmtpSettings, Submission

FOOTER_TEXT = "This message was sent from your website contact form."


def build_subject(submission: Submission) -> str:
    # Header values must stay on a single line.
    name = " ".join(submission.name.split())
    return f"New Contact Form Message from {name}"


def build_html_body(submission: Submission) -> str:
    message_html = "<br>".join(escape(line) for line in submission.message.splitlines())
    return f"""
<h2>New Contact Form Submission</h2>
<div style="font-family: Arial, sans-serif; max-width: 600px;">
    <p><strong>Name:</strong> {escape(submission.name)}</p>
    <p><strong>Email:</strong> {escape(submission.email)}</p>
    <p><strong>Message:</strong></p>
    <div style="background-color: #f5f5f5; padding: 15px; border-radius: 5px; margin: 10px 0;">
        {message_html}
    </div>
    <hr style="margin: 20px 0;">
    <p style="color: #666; font-size: 12px;">
        {FOOTER_TEXT}
    </p>
</div>
"""


def build_text_body(submission: Submission) -> str:
    return (
        "New Contact Form Submission\n"
        "\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        "\n"
        "Message:\n"
        f"{submission.message}\n"
        "\n"
        "---\n"
        f"{FOOTER_TEXT}\n"
    )


def build_email_message(submission: Submission, smtp: SmtpSettings) -> EmailMessage:
    """Plain-text message with an HTML alternative, addressed to the operator.

    Reply-To always carries the submitter's own address.
    """
    msg = EmailMessage()
    msg["Subject"] = build_subject(submission)
    msg["From"] = smtp.from_email
    msg["To"] = smtp.to_email
    msg["Reply-To"] = submission.email
    domain = smtp.from_email.rpartition("@")[2] or None
    msg["Message-ID"] = make_msgid(domain=domain)
    msg.set_content(build_text_body(submission))
    msg.add_alternative(build_html_body(submission), subtype="html")
    return msg
