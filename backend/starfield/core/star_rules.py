"""Star Rules — identity, defaulting, merge and validation rules for star records.

Invariants:
    - merge_update never changes id or position, whatever the update carries
    - merge_update sets timestamp to now; a previous value at most
      CLOCK_STEP_TOLERANCE_MS ahead is kept so the clock stepping back never
      lowers it
    - generate_star_id never returns an identity already live in the collection
    - star_identity falls back to `star:<timestamp>` only when legacy ids are enabled
    - A delete addresses exactly one record; a stored id beats a legacy timestamp id
    - Functions never mutate their inputs — they return new dicts/lists

Design Decisions:
    - Clock and RNG are parameters, not globals: tests pin them
    - StarRules bundles the configurable policy so the service gets one object
      instead of three flags
"""

import random
import secrets
from dataclasses import dataclass
from typing import Callable, Iterable

from starfield.core.domain_types import (
    AXES, DEFAULT_POSITION_BOUND, ID_FIELD, ID_PREFIX, POSITION_FIELD,
    SIGN_FIELDS, TIMESTAMP_FIELD, ZODIAC_LABELS, StarRecord,
)
from starfield.core.errors import StarValidationError, ErrorContext

MAX_ID_ATTEMPTS = 8
CLOCK_STEP_TOLERANCE_MS = 5_000

IdSuffixFactory = Callable[[], str]


def _random_suffix() -> str:
    return secrets.token_hex(6)


# ─── Identity ────────────────────────────────────────────────────

def has_id(record: StarRecord) -> bool:
    """True if the record carries a non-empty id."""
    value = record.get(ID_FIELD)
    return isinstance(value, str) and value != ""


def star_identity(record: StarRecord, legacy_timestamp_ids: bool = True) -> str | None:
    """Identity used to address a stored record.

    Records written before ids were always assigned have none; those are
    addressed as `star:<timestamp>` when the legacy fallback is on.
    """
    if has_id(record):
        return record[ID_FIELD]
    if legacy_timestamp_ids and record.get(TIMESTAMP_FIELD) is not None:
        return f"{ID_PREFIX}{record[TIMESTAMP_FIELD]}"
    return None


def find_star_index(stars: list[StarRecord], star_id: str) -> int | None:
    """Index of the record whose id equals star_id exactly, or None."""
    for index, record in enumerate(stars):
        if record.get(ID_FIELD) == star_id:
            return index
    return None


def generate_star_id(
    existing_ids: Iterable[str],
    now_ms: int,
    suffix_factory: IdSuffixFactory = _random_suffix,
) -> str | None:
    """New id of the form `star:<ms>_<suffix>`, unique against existing_ids.

    Returns None if every attempt collided.
    """
    taken = set(existing_ids)
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = f"{ID_PREFIX}{now_ms}_{suffix_factory()}"
        if candidate not in taken:
            return candidate
    return None


# ─── Create / Update ─────────────────────────────────────────────

def random_position(bound: float, rng: random.Random) -> dict[str, float]:
    """Uniform point in the cube [-bound, bound]^3."""
    return {axis: rng.uniform(-bound, bound) for axis in AXES}


def apply_create_defaults(
    data: StarRecord, star_id: str, now_ms: int, bound: float, rng: random.Random,
) -> StarRecord:
    """Stored form of a new star: caller fields plus id, position, timestamp defaults."""
    record = dict(data)
    record[ID_FIELD] = star_id
    if record.get(POSITION_FIELD) is None:
        record[POSITION_FIELD] = random_position(bound, rng)
    if record.get(TIMESTAMP_FIELD) is None:
        record[TIMESTAMP_FIELD] = now_ms
    return record


def merge_update(existing: StarRecord, updates: StarRecord, now_ms: int) -> StarRecord:
    """Overlay updates on existing, then restore id/position and stamp the time."""
    merged = {**existing, **updates}
    merged[ID_FIELD] = existing.get(ID_FIELD)
    if POSITION_FIELD in existing:
        merged[POSITION_FIELD] = existing[POSITION_FIELD]
    else:
        merged.pop(POSITION_FIELD, None)
    merged[TIMESTAMP_FIELD] = _update_timestamp(existing.get(TIMESTAMP_FIELD), now_ms)
    return merged


def _update_timestamp(previous: object, now_ms: int) -> int:
    """now_ms, unless previous is ahead by no more than the clock-step tolerance."""
    if isinstance(previous, int) and not isinstance(previous, bool):
        if 0 < previous - now_ms <= CLOCK_STEP_TOLERANCE_MS:
            return previous
    return now_ms


def replace_at(stars: list[StarRecord], index: int, record: StarRecord) -> list[StarRecord]:
    """Copy of stars with the record at index swapped, order preserved."""
    return [record if i == index else s for i, s in enumerate(stars)]


def find_delete_index(
    stars: list[StarRecord], star_id: str, legacy_timestamp_ids: bool = True,
) -> int | None:
    """Index of the record a delete addresses.

    A stored id wins; the `star:<timestamp>` identity of an id-less record is
    only consulted when no stored id matched.
    """
    index = find_star_index(stars, star_id)
    if index is not None or not legacy_timestamp_ids:
        return index
    for i, record in enumerate(stars):
        if not has_id(record) and star_identity(record) == star_id:
            return i
    return None


def remove_matching(
    stars: list[StarRecord], star_id: str, legacy_timestamp_ids: bool = True,
) -> list[StarRecord]:
    """Copy of stars without the one record star_id addresses (if any)."""
    index = find_delete_index(stars, star_id, legacy_timestamp_ids)
    if index is None:
        return list(stars)
    return stars[:index] + stars[index + 1:]


def live_identities(
    stars: list[StarRecord], legacy_timestamp_ids: bool = True,
) -> set[str]:
    """Every identity a request could address: stored ids plus legacy timestamp ids."""
    identities = (star_identity(s, legacy_timestamp_ids) for s in stars)
    return {i for i in identities if i is not None}


# ─── Validation ──────────────────────────────────────────────────

def check_signs(record: StarRecord) -> None:
    """Raise StarValidationError unless all three sign fields are zodiac labels."""
    for name in SIGN_FIELDS:
        value = record.get(name)
        if value not in ZODIAC_LABELS:
            raise StarValidationError(
                f"{name} must be one of the 12 zodiac signs",
                field=name,
                context=ErrorContext(star_id=record.get(ID_FIELD)),
            )


@dataclass(frozen=True)
class StarRules:
    """Configurable policy applied by the star service."""
    position_bound: float = DEFAULT_POSITION_BOUND
    strict_signs: bool = False
    legacy_timestamp_ids: bool = True

    def validate(self, record: StarRecord) -> None:
        """Validation hook — no-op unless strict_signs is on."""
        if self.strict_signs:
            check_signs(record)
