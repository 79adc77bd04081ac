from __future__ import annotations

import smtplib

from contact_notifier.models import ErrorCode


class NotifyError(RuntimeError):
    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code


def classify_untyped_error(exc: BaseException) -> ErrorCode:
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return ErrorCode.AUTH
    if isinstance(exc, (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected)):
        return ErrorCode.CONNECTION
    if isinstance(exc, smtplib.SMTPException):
        return ErrorCode.REJECTED
    if isinstance(exc, TimeoutError):
        return ErrorCode.TIMEOUT
    if isinstance(exc, OSError):
        return ErrorCode.CONNECTION

    message = str(exc).lower()
    if "timed out" in message or "timeout" in message:
        return ErrorCode.TIMEOUT
    if "connection" in message or "refused" in message or "dns" in message:
        return ErrorCode.CONNECTION
    return ErrorCode.UNKNOWN
