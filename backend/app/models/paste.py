"""
PasteBin Backend — Paste Model
================================

What:  The in-memory record for a single paste.
How:   Frozen dataclass. Only PasteStore constructs instances, and it bumps
       the view count by swapping in a new instance (dataclasses.replace)
       under its lock, so a Paste handed to a caller never changes.
Who:   Created and owned by PasteStore; read by route handlers for serialization.

Lifecycle:
    1. Created by PasteStore.create() with views = 0
    2. Replaced by a copy with views + 1 on every PasteStore.get_for_view()
    3. Never deleted; lives as long as the process
"""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class Paste:
    """
    A stored paste.

    Attributes:
        id:          Short hex identifier, unique among live pastes
        content:     Paste body (non-empty, within the configured size bound)
        language:    Free-form language label ("plaintext" when not supplied)
        title:       Free-form title, already truncated to the configured length
        created_at:  UTC creation time
        views:       Number of full-record retrievals so far
    """

    id: str
    content: str
    language: str
    title: str
    created_at: datetime
    views: int = 0

    def with_view(self) -> "Paste":
        """Return a copy of this paste with one more view recorded."""
        return replace(self, views=self.views + 1)
