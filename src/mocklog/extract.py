"""
State extraction.

Recovers (message template, positional args) from the opaque state handed
to the generic `log` entry point. Rules are tried in order, first match wins:

1. Structured values: the state exposes `original_format` and `values`
   (FormattedLogValues does, as do dataclasses and pydantic models with
   those fields). Read both directly.
2. Plain string: the string is the message, args are absent (None).
3. Random-access sequence of (key, value) pairs: the LAST entry keyed
   "{OriginalFormat}" supplies the message; every other entry's value,
   in order, becomes an arg.
4. Any other iterable of pairs (mappings iterate their items): materialized
   once, the FIRST sentinel entry supplies the message; args are the values
   of all non-sentinel entries.

With duplicate sentinel keys, rule 3 takes the last and rule 4 the first.

Extraction never raises. A state that matches nothing yields NOT_FOUND and
the caller falls back to the formatter.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator, Mapping, Sequence
from operator import attrgetter
from typing import Any, NamedTuple

from mocklog.diagnostics import Diagnostics, EXTRACT_TAG
from mocklog.formatted import ORIGINAL_FORMAT_KEY

TEMPLATE_ATTRIBUTE = "original_format"
VALUES_ATTRIBUTE = "values"


class ExtractionResult(NamedTuple):
    found: bool
    message: str | None
    args: tuple[Any, ...] | None


NOT_FOUND = ExtractionResult(False, None, None)


STRUCTURED_ACCESSORS = (attrgetter(TEMPLATE_ATTRIBUTE), attrgetter(VALUES_ATTRIBUTE))

ACCESSOR_CACHE_SIZE = 256


@functools.lru_cache(maxsize=ACCESSOR_CACHE_SIZE)
def structured_accessors(state_type: type) -> tuple[attrgetter, attrgetter] | None:
    """
    Accessor pair for types declaring the structured-values capability.

    Covers properties, slots and class attributes. Fields that live only in
    the instance __dict__ (plain dataclasses, pydantic models) are checked
    per instance by _instance_exposes_fields().
    """
    if hasattr(state_type, TEMPLATE_ATTRIBUTE) and hasattr(state_type, VALUES_ATTRIBUTE):
        return STRUCTURED_ACCESSORS
    return None


class StateExtractor:
    """Classifies a log state and pulls out its template and args."""

    def __init__(self, original_format_key: str = ORIGINAL_FORMAT_KEY):
        self.original_format_key = original_format_key

    def extract(self, state: Any) -> ExtractionResult:
        if state is None:
            return NOT_FOUND

        # 1. Structured values
        accessors = structured_accessors(type(state))
        if accessors is None and _instance_exposes_fields(state):
            accessors = STRUCTURED_ACCESSORS
        if accessors is not None:
            result = self._from_structured(state, *accessors)
            if result.found:
                return result

        # 2. Plain string
        if isinstance(state, str):
            return ExtractionResult(True, state, None)

        if isinstance(state, (bytes, bytearray, memoryview)):
            return NOT_FOUND

        # 4. Mappings only iterate forward, via their items
        if isinstance(state, Mapping):
            return self._guarded(self._from_iterable, state.items(), state)

        # 3. Random access, last sentinel wins
        if isinstance(state, Sequence):
            return self._guarded(self._from_sequence, state, state)

        # 4. Forward-only, first sentinel wins
        if isinstance(state, Iterable):
            return self._guarded(self._from_iterable, state, state)

        return NOT_FOUND

    # ── Rules ─────────────────────────────────────────────────────

    def _from_structured(self, state: Any, get_template: attrgetter, get_values: attrgetter) -> ExtractionResult:
        try:
            template = get_template(state)
            values = get_values(state)
        except Exception as exc:
            _unreadable(state, repr(exc))
            return NOT_FOUND

        if template is not None and not isinstance(template, str):
            _unreadable(state, f"template is {type(template).__name__}")
            return NOT_FOUND
        if values is not None and not isinstance(values, (list, tuple)):
            _unreadable(state, f"values is {type(values).__name__}")
            return NOT_FOUND

        return ExtractionResult(True, template, tuple(values) if values is not None else None)

    def _from_sequence(self, entries: Sequence) -> ExtractionResult:
        if not all(_is_pair(entry) for entry in entries):
            return NOT_FOUND

        for i in range(len(entries) - 1, -1, -1):
            key, value = entries[i]
            if key == self.original_format_key:
                args = tuple(entries[j][1] for j in range(len(entries)) if j != i)
                return ExtractionResult(True, _to_message(value), args)
        return NOT_FOUND

    def _from_iterable(self, items: Iterable) -> ExtractionResult:
        entries = list(items)
        if not all(_is_pair(entry) for entry in entries):
            return NOT_FOUND

        for key, value in entries:
            if key == self.original_format_key:
                args = tuple(v for k, v in entries if k != self.original_format_key)
                return ExtractionResult(True, _to_message(value), args)
        return NOT_FOUND

    def _guarded(self, rule, entries: Any, state: Any) -> ExtractionResult:
        """Run a key-value rule; a misbehaving container counts as no match."""
        try:
            return rule(entries)
        except Exception as exc:
            Diagnostics.instance().debug(
                "key-value state unreadable",
                tags={EXTRACT_TAG},
                state_type=type(state).__name__,
                consumed=isinstance(state, Iterator),
                error=repr(exc),
            )
            return NOT_FOUND


_default_extractor = StateExtractor()


def extract_state(state: Any) -> ExtractionResult:
    """Extract with the default "{OriginalFormat}" sentinel key."""
    return _default_extractor.extract(state)


def _is_pair(entry: Any) -> bool:
    return isinstance(entry, tuple) and len(entry) == 2


def _to_message(value: Any) -> str | None:
    return None if value is None else str(value)


def _unreadable(state: Any, reason: str) -> None:
    Diagnostics.instance().debug(
        "structured fields unreadable",
        tags={EXTRACT_TAG},
        state_type=type(state).__name__,
        error=reason,
    )


def _instance_exposes_fields(state: Any) -> bool:
    fields = getattr(state, "__dict__", None)
    if not isinstance(fields, dict):
        return False
    state_type = type(state)
    return all(
        name in fields or hasattr(state_type, name)
        for name in (TEMPLATE_ATTRIBUTE, VALUES_ATTRIBUTE)
    )
