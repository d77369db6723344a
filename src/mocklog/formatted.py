"""
Structured log values.

A message template such as "Order {OrderId} shipped to {City}" plus a
positional value vector. Holes are filled by position, not by name: the
first hole takes the first value, and so on. The names only label the
key-value view.

Template grammar (per hole):  {Name[,alignment][:format]}
Literal braces are written doubled: {{ and }}.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

ORIGINAL_FORMAT_KEY = "{OriginalFormat}"
NULL_FORMAT = "[null]"
NULL_VALUE = "(null)"

_TOKEN = re.compile(r"\{\{|\}\}|\{([^{}]+)\}")


def hole_names(template: str | None) -> list[str]:
    """Names of the holes in `template`, in order of appearance."""
    if not template:
        return []
    names = []
    for match in _TOKEN.finditer(template):
        body = match.group(1)
        if body is not None:
            names.append(_split_hole(body)[0])
    return names


def format_template(template: str | None, values: Sequence[Any] | None = ()) -> str:
    """
    Render `template` with `values` filled in positionally.

    Holes without a matching value are left as written.
    """
    if template is None:
        return NULL_FORMAT
    values = values or ()
    index = 0

    def replace(match: re.Match) -> str:
        nonlocal index
        token = match.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        position = index
        index += 1
        if position >= len(values):
            return token
        return _render_hole(match.group(1), values[position])

    return _TOKEN.sub(replace, template)


def _split_hole(body: str) -> tuple[str, int | None, str]:
    """Split 'Name,-8:0.00' into ('Name', -8, '0.00')."""
    fmt = ""
    if ":" in body:
        body, fmt = body.split(":", 1)
    alignment = None
    if "," in body:
        body, align_str = body.split(",", 1)
        try:
            alignment = int(align_str.strip())
        except ValueError:
            alignment = None
    return body.strip(), alignment, fmt


def _render_hole(body: str, value: Any) -> str:
    _, alignment, fmt = _split_hole(body)
    text = _render_value(value, fmt)
    if alignment is not None:
        width = abs(alignment)
        text = text.ljust(width) if alignment < 0 else text.rjust(width)
    return text


def _render_value(value: Any, fmt: str) -> str:
    if value is None:
        return NULL_VALUE
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(_render_value(v, fmt) for v in value)
    if fmt:
        try:
            return format(value, fmt)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


class FormattedLogValues(Sequence):
    """
    Template plus positional values, as produced by the logging call-site
    helpers.

    Also readable as a sequence of (key, value) pairs: one pair per value,
    keyed by its hole name, followed by (ORIGINAL_FORMAT_KEY, template).

        >>> state = FormattedLogValues("Info with {Name}", ("value",))
        >>> list(state)
        [('Name', 'value'), ('{OriginalFormat}', 'Info with {Name}')]
        >>> str(state)
        'Info with value'
    """

    def __init__(self, template: str | None, values: Sequence[Any] | None = ()):
        self._original_format = template
        self._values = tuple(values) if values is not None else ()
        names = hole_names(template)
        pairs = [
            (names[i] if i < len(names) else str(i), value)
            for i, value in enumerate(self._values)
        ]
        pairs.append((ORIGINAL_FORMAT_KEY, template))
        self._pairs = tuple(pairs)
        self._rendered: str | None = None

    @property
    def original_format(self) -> str | None:
        return self._original_format

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    def __getitem__(self, index):
        return self._pairs[index]

    def __len__(self) -> int:
        return len(self._pairs)

    def __str__(self) -> str:
        if self._rendered is None:
            self._rendered = format_template(self._original_format, self._values)
        return self._rendered

    def __repr__(self) -> str:
        return f"FormattedLogValues({self._original_format!r}, {self._values!r})"

    @staticmethod
    def formatter(state: Any, error: BaseException | None) -> str:
        """Formatter callback for the generic `log` entry point."""
        return str(state)
