"""
Profile Services

Profile persistence and the plain-text credit context summary.
"""

from .profile_store import ProfileStore
from .context import build_credit_context, NO_PROFILE_MESSAGE

__all__ = [
    'ProfileStore',
    'build_credit_context',
    'NO_PROFILE_MESSAGE',
]
