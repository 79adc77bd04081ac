from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TransportKind(str, Enum):
    SMTP = "smtp"
    RELAY = "relay"


class ErrorCode(str, Enum):
    CONFIG = "CONFIG"
    CONNECTION = "CONNECTION"
    TIMEOUT = "TIMEOUT"
    AUTH = "AUTH"
    REJECTED = "REJECTED"
    HTTP_STATUS = "HTTP_STATUS"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    EXPLICIT_FAILURE = "EXPLICIT_FAILURE"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Submission:
    name: str
    email: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "message": self.message}


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int
    username: str
    password: str
    from_email: str
    to_email: str

    def has_credentials(self) -> bool:
        return bool(self.username and self.password)


@dataclass(frozen=True)
class AppSettings:
    transport: TransportKind
    smtp: SmtpSettings
    timeout_sec: float
    log_level: str
    log_dir: str
    api_host: str
    api_port: int
