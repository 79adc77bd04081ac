from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from contact_notifier.errors import NotifyError, classify_untyped_error
from contact_notifier.message import build_email_message
from contact_notifier.models import AppSettings, ErrorCode, Submission, TransportKind
from contact_notifier.relay_transport import RELAY_ENDPOINT_URL, post_to_relay
from contact_notifier.smtp_transport import check_smtp_settings, send_via_smtp

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContactNotifier:
    """Delivers contact-form submissions through the configured transport."""

    settings: AppSettings

    @property
    def transport(self) -> TransportKind:
        return self.settings.transport

    async def notify(self, submission: Submission) -> bool:
        """Return True when the transport confirmed delivery.

        Failures are logged and reported as False; nothing is raised.
        """
        try:
            if self.transport == TransportKind.RELAY:
                await asyncio.to_thread(post_to_relay, submission, self.settings.timeout_sec)
                LOGGER.info(
                    "Contact email forwarded transport=%s endpoint=%s",
                    self.transport.value,
                    RELAY_ENDPOINT_URL,
                )
                return True

            check_smtp_settings(self.settings.smtp)
            message = build_email_message(submission, self.settings.smtp)
            message_id = await asyncio.to_thread(
                send_via_smtp, message, self.settings.smtp, self.settings.timeout_sec
            )
            LOGGER.info(
                "Contact email sent transport=%s message_id=%s",
                self.transport.value,
                message_id,
            )
            return True
        except NotifyError as exc:
            self._log_failure(exc.code, exc)
        except Exception as exc:  # noqa: BLE001
            self._log_failure(classify_untyped_error(exc), exc)
        return False

    def _log_failure(self, code: ErrorCode, exc: BaseException) -> None:
        LOGGER.warning(
            "Contact email delivery failed transport=%s code=%s error=%s",
            self.transport.value,
            code.value,
            exc,
        )
