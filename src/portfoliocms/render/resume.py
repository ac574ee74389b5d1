"""Resume timeline rendering."""

from __future__ import annotations

import html as html_mod
from datetime import date

from portfoliocms.storage.models import ResumeEntry, ResumeEntryType

DEFAULT_ICON = "📋"


def _plural(n: int, word: str) -> str:
    return f"{n} {word if n == 1 else word + 's'}"


def _parse(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def calculate_duration(start: str, end: str | None = None, today: date | None = None) -> str:
    """Whole months between two dates, e.g. "2 years, 3 months".

    A missing end date counts up to today. Day-of-month is ignored.
    """
    start_date = _parse(start)
    if start_date is None:
        return ""
    end_date = _parse(end) or today or date.today()

    months = (end_date.year - start_date.year) * 12 + (end_date.month - start_date.month)
    months = max(months, 0)
    if months < 12:
        return _plural(months, "month")

    years, remaining = divmod(months, 12)
    if remaining == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')}, {_plural(remaining, 'month')}"


def format_month(value: str | None) -> str:
    """Format "2021-03-01" as "Mar 2021". A missing date reads "Present"."""
    parsed = _parse(value)
    if parsed is None:
        return "Present"
    return f"{parsed:%b %Y}"


def timeline_range(entries: list[ResumeEntry], today: date | None = None) -> tuple[int, int]:
    """(earliest, latest) year covered by the entries."""
    today = today or date.today()
    years = []
    for entry in entries:
        start = _parse(entry.date_start)
        if start:
            years.append(start.year)
        end = _parse(entry.date_end) or today
        years.append(end.year)
    if not years:
        return today.year, today.year
    return min(years), max(years)


def render_entry(entry: ResumeEntry, entry_type: ResumeEntryType | None, today: date | None = None) -> str:
    icon = html_mod.escape(entry_type.icon or DEFAULT_ICON) if entry_type else DEFAULT_ICON
    type_name = html_mod.escape(entry_type.name) if entry_type else "Unknown Type"
    date_range = f"{format_month(entry.date_start)} &ndash; {format_month(entry.date_end)}"
    duration = calculate_duration(entry.date_start, entry.date_end, today=today)

    parts = [
        f'<div class="timeline-entry" data-entry-id="{html_mod.escape(entry.id)}">',
        f'<div class="timeline-dot"><span class="dot-icon">{icon}</span></div>',
        '<div class="entry-card">',
        '<div class="entry-header">',
        f'<div class="entry-type-badge"><span class="type-icon">{icon}</span>'
        f'<span class="type-name">{type_name}</span></div>',
        f'<div class="entry-dates"><span class="date-range">{date_range}</span>'
        f'<span class="duration">{duration}</span></div>',
        "</div>",
        '<div class="entry-content">',
        f'<h3 class="entry-title">{html_mod.escape(entry.title)}</h3>',
    ]
    if entry.subtitle:
        parts.append(f'<p class="entry-subtitle">{html_mod.escape(entry.subtitle)}</p>')
    if entry.description:
        parts.append(
            f'<div class="entry-description"><p>{html_mod.escape(entry.description)}</p></div>'
        )
    if entry.media_urls:
        n = len(entry.media_urls)
        parts.append(
            f'<div class="entry-media"><p class="media-count">{_plural(n, "attachment")}</p></div>'
        )
    parts.append("</div>")
    if entry.is_featured:
        parts.append('<div class="featured-badge">Featured in Portfolio</div>')
    parts.append("</div></div>")
    return "".join(parts)


def render_timeline(
    entries: list[ResumeEntry],
    entry_types: list[ResumeEntryType],
    today: date | None = None,
) -> str:
    """Render the full timeline, newest entry first."""
    if not entries:
        return (
            '<div class="timeline-empty"><h3>No Resume Entries Yet</h3>'
            "<p>Resume entries will appear here once they are added.</p></div>"
        )

    types_by_id = {t.id: t for t in entry_types}
    ordered = sorted(entries, key=lambda e: e.date_start, reverse=True)
    earliest, latest = timeline_range(entries, today=today)

    years = "".join(
        f'<div class="year-marker" data-year="{year}">{year}</div>'
        for year in range(latest, earliest - 1, -1)
    )
    rendered = "".join(
        render_entry(e, types_by_id.get(e.entry_type_id), today=today) for e in ordered
    )
    return (
        '<div class="timeline-track">'
        f'<div class="timeline-years">{years}</div>'
        '<div class="timeline-line"></div>'
        f'<div class="timeline-entries">{rendered}</div>'
        "</div>"
    )
