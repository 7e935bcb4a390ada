"""
Mail Services

Lob certified-mail gateway, the dispute letter renderer and its per-type templates.
"""
from .letters import render_letter, DEFAULT_DISPUTE_REASON
from .templates import LETTER_TEMPLATES, STANDARD_BUREAU_ENCLOSURES
from .lob_client import (
    LobMailService,
    LetterSent,
    LetterFailed,
    BulkDispatchResult,
    MailDispatchError,
    MailTimeoutError,
    get_mail_service,
)

__all__ = [
    "render_letter",
    "DEFAULT_DISPUTE_REASON",
    "STANDARD_BUREAU_ENCLOSURES",
    "LETTER_TEMPLATES",
    "LobMailService",
    "LetterSent",
    "LetterFailed",
    "BulkDispatchResult",
    "MailDispatchError",
    "MailTimeoutError",
    "get_mail_service",
]
