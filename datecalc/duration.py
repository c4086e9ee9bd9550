"""Human-readable labels for elapsed-time durations.

A millisecond delta is broken down greedily into weeks, days, hours, minutes,
seconds and milliseconds, and the units worth showing are rendered as
"1 minute 30 seconds". Every aspect of the label (words, delimiters,
prefixes for past/future/now, per-unit visibility, HTML markup) is an option
of `DurationOptions`.

Example:
    >>> from datecalc import format_duration
    >>> format_duration(-90000, past_suffix=" ago")
    '1 minute 30 seconds ago'
    >>> format_duration(5 * 3600000 + 5000)
    '5 hours'
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from html import escape
from typing import Any, Literal, TypeAlias

from datecalc.core import Calendar
from datecalc.util import DAY, HOUR, MILLISECOND, MINUTE, SECOND, WEEK

logger = logging.getLogger(__name__)

Show: TypeAlias = bool | Literal["auto"]


@dataclass(frozen=True, kw_only=True)
class DurationOptions:
    """Formatting options for `format_duration`.

    Attributes:
        week, weeks ... millisecond, milliseconds: Singular/plural captions
        null_label: Returned for invalid input or when no unit is visible
        past_prefix, past_suffix: Wrap labels of negative durations
        future_prefix, future_suffix: Wrap labels of positive durations
        now_prefix, now_suffix: Wrap the label of a zero duration
        delimiter: Between unit labels
        delimiter_caption: Between a count and its caption
        show_week ... show_ms: True/False to force a unit, "auto" to show it
            when non-zero and plausible for the total magnitude
        html: Wrap counts, captions and the label in tags
        tag_wrapper, class_past: Tag around the whole label, and the class it
            gets for past durations
        tag_label_wrapper, class_label_wrapper: Tag around each unit label
        tag_count, class_count: Tag around each count
        tag_caption, class_caption: Tag around each caption
        precise: Show every non-zero unit regardless of magnitude
        show_zero_lead: Show zero units larger than the total
        show_zero_trail: Show zero units smaller than the total
        show_zero_ms: Render "0 ms" for a zero duration
        input_as_sec, input_as_min, input_as_hr, input_as_day: Read the input
            in that unit instead of milliseconds
    """

    week: str = "week"
    weeks: str = "weeks"
    day: str = "day"
    days: str = "days"
    hour: str = "hour"
    hours: str = "hours"
    minute: str = "minute"
    minutes: str = "minutes"
    second: str = "second"
    seconds: str = "seconds"
    millisecond: str = "ms"
    milliseconds: str = "ms"
    null_label: str = "---"
    past_prefix: str = ""
    past_suffix: str = ""
    future_prefix: str = ""
    future_suffix: str = ""
    now_prefix: str = ""
    now_suffix: str = ""
    delimiter: str = " "
    delimiter_caption: str = " "
    show_week: Show = "auto"
    show_day: Show = "auto"
    show_hr: Show = "auto"
    show_min: Show = "auto"
    show_sec: Show = "auto"
    show_ms: Show = "auto"
    html: bool = False
    tag_wrapper: str | None = None
    tag_label_wrapper: str | None = None
    tag_count: str | None = "em"
    tag_caption: str | None = "small"
    class_past: str | None = "past-date"
    class_count: str | None = None
    class_caption: str | None = None
    class_label_wrapper: str | None = None
    precise: bool = False
    show_zero_lead: bool = False
    show_zero_trail: bool = False
    show_zero_ms: bool = True
    input_as_sec: bool = False
    input_as_min: bool = False
    input_as_hr: bool = False
    input_as_day: bool = False


DEFAULT_OPTIONS = DurationOptions()

_OPTION_NAMES = frozenset(f.name for f in fields(DurationOptions))

# "Time since" wording, applied where the caller kept the plain defaults
_SINCE_DEFAULTS: dict[str, str] = {
    "past_prefix": "",
    "past_suffix": " ago",
    "future_prefix": "in ",
    "future_suffix": "",
}

_INPUT_SCALES = (
    ("input_as_sec", SECOND),
    ("input_as_min", MINUTE),
    ("input_as_hr", HOUR),
    ("input_as_day", DAY),
)


@dataclass(frozen=True)
class _Unit:
    name: str
    ms: int
    singular: str
    plural: str
    show: str
    # Largest total magnitude at which "auto" still shows the unit
    limit: float


_UNITS: tuple[_Unit, ...] = (
    _Unit("week", WEEK, "week", "weeks", "show_week", math.inf),
    _Unit("day", DAY, "day", "days", "show_day", 30 * DAY),
    _Unit("hour", HOUR, "hour", "hours", "show_hr", 7 * DAY),
    _Unit("min", MINUTE, "minute", "minutes", "show_min", 2 * HOUR),
    _Unit("sec", SECOND, "second", "seconds", "show_sec", 2 * MINUTE),
    _Unit("ms", MILLISECOND, "millisecond", "milliseconds", "show_ms", 2 * SECOND),
)


@dataclass(frozen=True, kw_only=True)
class DurationBreakdown:
    """Unit counts of a duration's magnitude.

    Attributes:
        week, day, hour, min, sec, ms: Count per unit, coarsest first
        past: True if the delta was negative
        total: Absolute magnitude in milliseconds
    """

    week: int = 0
    day: int = 0
    hour: int = 0
    min: int = 0
    sec: int = 0
    ms: int = 0
    past: bool = False
    total: float = 0

    @property
    def now(self) -> bool:
        """True for a zero-length duration."""
        return self.total == 0

    def count(self, unit: str) -> int:
        return getattr(self, unit)


def _is_finite(value: int | float) -> bool:
    # Ints are exact and may exceed the float range math.isfinite accepts
    return isinstance(value, int) or math.isfinite(value)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and _is_finite(value)
    )


def _resolve_options(
    options: "DurationOptions | Mapping[str, Any] | None",
    overrides: Mapping[str, Any],
) -> DurationOptions:
    """Overlay caller overrides onto a base options record."""
    if isinstance(options, Mapping):
        overrides = {**options, **overrides}
        options = None
    base = options if options is not None else DEFAULT_OPTIONS
    if not overrides:
        return base

    unknown = sorted(set(overrides) - _OPTION_NAMES)
    if unknown:
        raise TypeError(
            f"Unknown duration option(s): {', '.join(unknown)}\n"
            f"Valid options: {', '.join(sorted(_OPTION_NAMES))}"
        )
    return replace(base, **overrides)


def _breakdown(delta: Any, options: DurationOptions) -> DurationBreakdown | None:
    if not _is_number(delta):
        logger.debug("Cannot format %r as a duration", delta)
        return None

    for name, scale in _INPUT_SCALES:
        if getattr(options, name):
            delta *= scale
            break

    if not _is_finite(delta):
        logger.debug("Duration %r overflows once scaled to ms", delta)
        return None

    past = delta < 0
    total = abs(delta)
    remaining = total
    counts: dict[str, int] = {}

    for unit in _UNITS:
        if unit.ms > remaining:
            counts[unit.name] = 0
            continue
        count = int(remaining // unit.ms)
        remaining -= count * unit.ms
        counts[unit.name] = count

    return DurationBreakdown(past=past, total=total, **counts)


def breakdown(
    delta: Any,
    options: "DurationOptions | Mapping[str, Any] | None" = None,
    **overrides: Any,
) -> DurationBreakdown | None:
    """Split a millisecond delta into unit counts.

    Only the `input_as_*` options matter here. Returns None when `delta` is
    not a finite number.
    """
    return _breakdown(delta, _resolve_options(options, overrides))


def _html_tag(tag: str | None, inner: str, cls: str | None = None) -> str:
    if not tag and not cls:
        return inner
    if not tag:
        tag = "span"
    attrs = f' class="{escape(cls)}"' if cls else ""
    return f"<{tag}{attrs}>{inner}</{tag}>"


def _format_label(count: int, unit: _Unit, options: DurationOptions) -> str:
    word = unit.singular if count == 1 else unit.plural
    caption = getattr(options, word)

    if options.html:
        return _html_tag(
            options.tag_label_wrapper,
            _html_tag(options.tag_count, escape(str(count)), options.class_count)
            + options.delimiter_caption
            + _html_tag(options.tag_caption, escape(caption), options.class_caption),
            options.class_label_wrapper,
        )

    return f"{count}{options.delimiter_caption}{caption}"


def _auto_visible(
    unit: _Unit, count: int, total: float, options: DurationOptions
) -> bool:
    if options.precise:
        visible = count > 0
    else:
        visible = count > 0 and total <= unit.limit

    if count == 0:
        if options.show_zero_lead and total <= unit.ms:
            visible = True
        elif options.show_zero_trail and total >= unit.ms:
            visible = True

    return visible


def _visible(
    unit: _Unit,
    parts: DurationBreakdown,
    options: DurationOptions,
    rendered: bool,
) -> bool:
    count = parts.count(unit.name)
    show = getattr(options, unit.show)
    if show == "auto":
        visible = _auto_visible(unit, count, parts.total, options)
    else:
        visible = bool(show)

    if unit.name == "ms" and parts.now and not rendered and options.show_zero_ms:
        visible = True

    return visible


def format_duration(
    delta: Any,
    options: "DurationOptions | Mapping[str, Any] | None" = None,
    **overrides: Any,
) -> str:
    """
    Render a millisecond delta as a human-readable label.

    Args:
        delta: Signed duration in milliseconds (or in the unit selected by an
            `input_as_*` option). Negative values are in the past.
        options: Base options record or mapping (default: DEFAULT_OPTIONS)
        **overrides: Individual options overriding the base

    Returns:
        The label, or `null_label` when delta is not a finite number or no
        unit is visible.

    Example:
        >>> format_duration(90000)
        '1 minute 30 seconds'
        >>> format_duration(0, now_prefix="just now: ")
        'just now: 0 ms'
        >>> format_duration(float("nan"))
        '---'
    """
    options = _resolve_options(options, overrides)
    parts = _breakdown(delta, options)
    if parts is None:
        return options.null_label

    labels: list[str] = []
    for unit in _UNITS:
        if _visible(unit, parts, options, rendered=bool(labels)):
            labels.append(_format_label(parts.count(unit.name), unit, options))

    if not labels:
        return options.null_label

    if parts.now:
        prefix, suffix = options.now_prefix, options.now_suffix
    elif parts.past:
        prefix, suffix = options.past_prefix, options.past_suffix
    else:
        prefix, suffix = options.future_prefix, options.future_suffix

    label = prefix + options.delimiter.join(labels) + suffix
    if not options.html:
        return label

    return _html_tag(
        options.tag_wrapper, label, options.class_past if parts.past else None
    )


def since(
    value: Any,
    now: Any = None,
    options: "DurationOptions | Mapping[str, Any] | None" = None,
    calendar: Calendar | None = None,
    **overrides: Any,
) -> str:
    """
    Describe how far `value` lies from `now`, e.g. "5 minutes ago".

    Unless the caller sets them, past labels get the suffix " ago" and future
    labels the prefix "in ".

    Args:
        value: Any date-like value accepted by `Calendar.to_instant`
        now: Reference point (default: the calendar's current time)
        options: Base options record or mapping
        calendar: Calendar used to read the dates (default: host calendar)
        **overrides: Individual options overriding the base

    Example:
        >>> since(1_000, now=61_000)
        '1 minute ago'
    """
    calendar = calendar or Calendar()
    base = _resolve_options(options, overrides)
    supplied = set(overrides)
    if isinstance(options, Mapping):
        supplied.update(options)
    wording = {
        name: text
        for name, text in _SINCE_DEFAULTS.items()
        if name not in supplied
        and getattr(base, name) == getattr(DEFAULT_OPTIONS, name)
    }
    if wording:
        base = replace(base, **wording)

    delta = calendar.to_instant(value) - calendar.to_instant(now)
    return format_duration(delta, base)
