"""
PasteBin Backend — Paste Identifier Generation
================================================

What:  Produces short, unpredictable paste identifiers.
How:   `secrets.token_hex` draws from the OS CSPRNG; 4 bytes give an
       8-character lowercase hex id (~32 bits of entropy).

Predictable ids would let one client walk the id space and read other
clients' pastes, so `random` must never be used here.
"""

import secrets
from typing import Optional

from app.config import settings


def generate_paste_id(num_bytes: Optional[int] = None) -> str:
    """
    Return a fresh random hex identifier.

    Args:
        num_bytes: Random bytes to draw (defaults to settings.paste_id_bytes).
                   The id is twice this many characters long.
    """
    if num_bytes is None:
        num_bytes = settings.paste_id_bytes
    if num_bytes < 1:
        raise ValueError(f"num_bytes must be positive, got {num_bytes}")
    return secrets.token_hex(num_bytes)
