"""Text decoding and answer shuffling for questions before display."""

from __future__ import annotations

import html
import logging
import random
from typing import Optional, Sequence, TypeVar
from urllib.parse import unquote

T = TypeVar("T")

logger = logging.getLogger(__name__)

__all__ = ["decode_text", "shuffle_answers"]


def decode_text(text: str) -> str:
    """Undo ``url3986`` percent-encoding, then HTML entities.

    Input that cannot be decoded is returned unchanged so a bad field never
    breaks a quiz.
    """

    try:
        return html.unescape(unquote(text, errors="strict"))
    except (UnicodeDecodeError, TypeError, AttributeError) as exc:
        logger.debug("Leaving text undecoded: %s", exc)
        return text


def shuffle_answers(
    items: Sequence[T], rng: Optional[random.Random] = None
) -> list[T]:
    """Return a shuffled copy of ``items`` (Fisher-Yates)."""

    rand = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rand.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
