"""Front/back-nine tee naming conventions.

Nine-hole tee snapshots are stored as ``"White (Front 9)"`` or
``"White (Back 9)"`` with local hole numbers 1-9. The back nine maps onto
canonical holes 10-18 so both halves line up with the full "White" tee.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

_FRONT = re.compile(r"\s*\(?\s*\bfront\s*9\b\s*\)?\s*", re.IGNORECASE)
_BACK = re.compile(r"\s*\(?\s*\bback\s*9\b\s*\)?\s*", re.IGNORECASE)

DEFAULT_TEE_BASE = "Tee"


class NineTag(str, Enum):
    FRONT = "front"
    BACK = "back"
    FULL = "full"


@dataclass(frozen=True)
class TeeIdentity:
    base: str
    nine: NineTag

    @property
    def is_nine(self) -> bool:
        return self.nine is not NineTag.FULL


@lru_cache(maxsize=1024)
def normalize_tee_name(tee_name: str | None) -> TeeIdentity:
    raw = (tee_name or "").strip()
    if not raw:
        return TeeIdentity(DEFAULT_TEE_BASE, NineTag.FULL)

    if _FRONT.search(raw):
        base = _FRONT.sub(" ", raw).strip()
        return TeeIdentity(base or DEFAULT_TEE_BASE, NineTag.FRONT)
    if _BACK.search(raw):
        base = _BACK.sub(" ", raw).strip()
        return TeeIdentity(base or DEFAULT_TEE_BASE, NineTag.BACK)
    return TeeIdentity(raw, NineTag.FULL)


def canonical_hole_number(hole_number: float | None, nine: NineTag) -> int | None:
    """Map a local hole number onto the 1-18 layout of the full tee."""

    if hole_number is None:
        return None
    hole = int(round(hole_number))
    if hole <= 0:
        return None
    if nine is NineTag.BACK and hole <= 9:
        return hole + 9
    return hole


__all__ = [
    "DEFAULT_TEE_BASE",
    "NineTag",
    "TeeIdentity",
    "canonical_hole_number",
    "normalize_tee_name",
]
