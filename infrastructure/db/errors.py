"""
Translation of Supabase client failures into PersistenceError.
"""
import logging

from application.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def to_persistence_error(error: Exception, action: str) -> PersistenceError:
    """
    Wrap a client exception, keeping the store's error code when it has one.

    postgrest's APIError exposes ``code`` (e.g. ``"23505"``) and ``message``;
    transport errors have neither.
    """
    code = getattr(error, "code", None)
    message = getattr(error, "message", None) or str(error) or f"Failed to {action}"
    logger.error(f"Failed to {action}: {message} (code={code})")
    return PersistenceError(message, code=str(code) if code is not None else None)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``ilike`` performs a case-insensitive equality."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
