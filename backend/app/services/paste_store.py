"""
PasteBin Backend — Paste Store
================================

What:  Authoritative in-memory mapping from paste id to Paste.
       All paste state lives here; route handlers never touch the dict.
How:   A plain dict guarded by one threading.Lock. Pastes are frozen, so the
       view counter is bumped by replacing the entry inside the lock.
Who:   Constructed by create_app() and injected into routes via Depends.

Operations:
    create(content, language?, title?) → (id, Paste)   validates, inserts
    get_for_view(id)                   → Paste         counts a view
    get_raw(id)                        → str           does NOT count a view

Atomicity:
    - create: id allocation and insert happen under the lock, so two
      concurrent creates can never claim the same id.
    - get_for_view: lookup and replace happen under the lock, so concurrent
      viewers of one paste never lose an increment.

Limitations:
    State is lost on restart and the mapping grows without bound; there is
    no eviction or expiry.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Tuple

from app.config import settings
from app.exceptions import IdentifierExhaustedError, NotFoundError, ValidationError
from app.models.paste import Paste
from app.services.id_generator import generate_paste_id

logger = logging.getLogger(__name__)

CONTENT_ERROR_MESSAGE = "Content too large or missing"


class PasteStore:
    """
    Thread-safe in-memory paste storage.

    Args:
        max_content_length: Largest accepted content, in characters
        max_title_length:   Titles are cut to this many characters
        default_language:   Language used when none is supplied
        id_factory:         Zero-arg callable producing candidate ids
        id_max_attempts:    Candidate ids drawn per create before giving up

    Every argument defaults to the matching value in settings.
    """

    def __init__(
        self,
        max_content_length: Optional[int] = None,
        max_title_length: Optional[int] = None,
        default_language: Optional[str] = None,
        id_factory: Optional[Callable[[], str]] = None,
        id_max_attempts: Optional[int] = None,
    ):
        self.max_content_length = (
            settings.max_content_length if max_content_length is None else max_content_length
        )
        self.max_title_length = (
            settings.max_title_length if max_title_length is None else max_title_length
        )
        self.default_language = (
            settings.default_language if default_language is None else default_language
        )
        self.id_max_attempts = (
            settings.id_max_attempts if id_max_attempts is None else id_max_attempts
        )
        self._id_factory = id_factory or generate_paste_id
        self._pastes: Dict[str, Paste] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pastes)

    def __contains__(self, paste_id: object) -> bool:
        with self._lock:
            return paste_id in self._pastes

    # ── Create ────────────────────────────────────────────────────────────

    def create(
        self,
        content: Optional[str],
        language: Optional[str] = None,
        title: Optional[str] = None,
    ) -> Tuple[str, Paste]:
        """
        Validate input, store a new paste and return (id, paste).

        Raises:
            ValidationError: content missing, not text, empty, or too long;
                             language/title present but not text
            IdentifierExhaustedError: no free id found in id_max_attempts draws
        """
        self._validate_content(content)
        language = self._optional_text(language, "language")
        title = self._optional_text(title, "title")

        if language is None:
            language = self.default_language
        title = (title or "")[: self.max_title_length]
        created_at = datetime.now(timezone.utc)

        with self._lock:
            paste_id = self._allocate_id()
            paste = Paste(
                id=paste_id,
                content=content,
                language=language,
                title=title,
                created_at=created_at,
                views=0,
            )
            self._pastes[paste_id] = paste

        logger.info(
            "Paste %s created: %d chars, language=%s", paste_id, len(content), language
        )
        return paste_id, paste

    # ── Read ──────────────────────────────────────────────────────────────

    def get_for_view(self, paste_id: str) -> Paste:
        """
        Return the paste with its view count incremented by one.

        Raises:
            NotFoundError: no live paste has this id
        """
        with self._lock:
            paste = self._pastes.get(paste_id)
            if paste is None:
                raise NotFoundError(resource="Paste", resource_id=paste_id)
            paste = paste.with_view()
            self._pastes[paste_id] = paste
        return paste

    def get_raw(self, paste_id: str) -> str:
        """
        Return only the paste content. The view count is left untouched.

        Raises:
            NotFoundError: no live paste has this id
        """
        with self._lock:
            paste = self._pastes.get(paste_id)
        if paste is None:
            raise NotFoundError(resource="Paste", resource_id=paste_id)
        return paste.content

    # ── Internals ─────────────────────────────────────────────────────────

    def _allocate_id(self) -> str:
        # Caller must hold self._lock
        for attempt in range(1, self.id_max_attempts + 1):
            candidate = self._id_factory()
            if candidate not in self._pastes:
                return candidate
            logger.warning(
                "Paste id collision on %s (attempt %d/%d)",
                candidate,
                attempt,
                self.id_max_attempts,
            )
        raise IdentifierExhaustedError(
            attempts=self.id_max_attempts,
            context={"live_pastes": len(self._pastes)},
        )

    def _validate_content(self, content: object) -> None:
        if not isinstance(content, str) or not content:
            raise ValidationError(
                message=CONTENT_ERROR_MESSAGE,
                field="content",
                context={"reason": "missing"},
            )
        if len(content) > self.max_content_length:
            raise ValidationError(
                message=CONTENT_ERROR_MESSAGE,
                field="content",
                context={
                    "reason": "too_large",
                    "max_length": self.max_content_length,
                    "length": len(content),
                },
            )

    @staticmethod
    def _optional_text(value: object, field: str) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        raise ValidationError(message=f"'{field}' must be a string", field=field)
