from __future__ import annotations

from typing import Iterable, Optional


def should_delete(content: str, banned_terms: Iterable[str]) -> Optional[str]:
    """Return the first banned term found in ``content``, or ``None``.

    Matching is a literal, case-sensitive substring test, so ``"badword1"``
    also matches inside ``"superbadword123"``.
    """
    for term in banned_terms:
        if term and term in content:
            return term
    return None
