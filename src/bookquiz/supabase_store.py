"""
Supabase Persistence Client.

Stores quiz sessions in a single table keyed by session id:

    quiz_sessions(id uuid, contact jsonb, profile jsonb, updated_at timestamptz)

Partial saves merge into the stored `profile` column, so repeated or
out-of-band calls are harmless.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone

from supabase import Client, create_client

from .config import QuizSettings, get_settings
from .errors import PersistenceError
from .persistence import PersistenceClient

logger = logging.getLogger(__name__)

# Singleton client instance
_client: Client | None = None


def get_client(settings: QuizSettings | None = None) -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        settings = settings or get_settings()
        if not settings.supabase_url or not settings.supabase_key:
            raise PersistenceError("BOOKQUIZ_SUPABASE_URL and BOOKQUIZ_SUPABASE_KEY must be set")
        _client = create_client(settings.supabase_url, settings.supabase_key)

    return _client


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _execute(query):
    """Run a blocking query builder off the event loop."""
    return await asyncio.to_thread(query.execute)


class SupabasePersistenceClient(PersistenceClient):
    """PersistenceClient backed by a Supabase table."""

    def __init__(self, client: Client | None = None, table: str | None = None):
        self._client = client
        self.table = table or get_settings().sessions_table

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    async def create_session(self, contact: dict) -> str:
        """Insert a session row for the given parent contact."""
        session_id = str(uuid.uuid4())
        try:
            await _execute(self.client.table(self.table).insert({
                "id": session_id,
                "contact": contact,
                "profile": dict(contact),
                "updated_at": _now(),
            }))
        except Exception as e:
            logger.error(f"Failed to create quiz session: {e}")
            raise PersistenceError("Failed to create quiz session") from e
        return session_id

    async def save(self, session_id: str, fields: dict) -> None:
        """Merge fields into the stored profile for this session."""
        try:
            result = await _execute(self.client.table(self.table).select("profile").eq("id", session_id))
            stored = {}
            if result.data:
                stored = result.data[0].get("profile") or {}
            stored.update(fields)

            await _execute(self.client.table(self.table).upsert({
                "id": session_id,
                "profile": stored,
                "updated_at": _now(),
            }))
        except Exception as e:
            logger.error(f"Failed to save quiz session {session_id}: {e}")
            raise PersistenceError("Failed to save quiz session") from e

    async def load(self, session_id: str) -> dict | None:
        """Fetch the stored profile fields for a session, if any."""
        try:
            result = await _execute(self.client.table(self.table).select("profile").eq("id", session_id))
        except Exception as e:
            logger.warning(f"Failed to load quiz session {session_id}: {e}")
            return None
        if not result.data:
            return None
        return result.data[0].get("profile") or {}
