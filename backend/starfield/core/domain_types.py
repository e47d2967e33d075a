"""Domain Types — record type, wire field names and enums shared by every layer.

Invariants:
    - Star ids are opaque strings — never parsed, only compared
    - ZodiacSign enumerates exactly the 12 labels the client offers
    - Star field names are the camelCase keys of the wire/storage format

Design Decisions:
    - str Enum: serializes to JSON without custom encoders
    - Stars travel as plain dicts: unknown client fields must survive a round trip
"""

from enum import Enum
from typing import Any


# ─── Record Type ─────────────────────────────────────────────────

# A stored star record: JSON object with the fields below plus any extras
StarRecord = dict[str, Any]


# ─── Field Names ─────────────────────────────────────────────────

ID_FIELD = "id"
POSITION_FIELD = "position"
TIMESTAMP_FIELD = "timestamp"
SIGN_FIELDS: tuple[str, ...] = ("sunSign", "moonSign", "risingSign")
AXES: tuple[str, ...] = ("x", "y", "z")

ID_PREFIX = "star:"
DEFAULT_POSITION_BOUND = 40.0


# ─── Enums ───────────────────────────────────────────────────────

class ZodiacSign(str, Enum):
    """The 12 zodiac labels, in calendar order."""
    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"


class StoreBackend(str, Enum):
    """Backing medium for the star collection — maps to settings.store_backend."""
    FILE = "file"
    DATABASE = "database"
    MEMORY = "memory"


ZODIAC_LABELS: frozenset[str] = frozenset(s.value for s in ZodiacSign)
