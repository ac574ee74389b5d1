"""Business card rendering for the singleton profile."""

from __future__ import annotations

import html as html_mod

from portfoliocms.render.blocks import is_safe_url
from portfoliocms.storage.models import Profile


def _contact_lines(profile: Profile) -> list[str]:
    lines = []
    if profile.show_email and profile.email:
        email = html_mod.escape(profile.email)
        lines.append(f'<a class="card-email" href="mailto:{email}">{email}</a>')
    if profile.show_phone and profile.phone:
        phone = html_mod.escape(profile.phone)
        lines.append(f'<span class="card-phone">{phone}</span>')
    if profile.show_linkedin and is_safe_url(profile.linkedin):
        lines.append(
            f'<a class="card-linkedin" href="{html_mod.escape(profile.linkedin.strip())}" '
            f'target="_blank" rel="noopener">LinkedIn</a>'
        )
    return lines


def render_profile_card(profile: Profile | None) -> str:
    """Render the business card. Hidden contact fields are left out entirely."""
    if profile is None or not profile.full_name:
        return '<div class="business-card business-card-empty"><p>Profile not set up yet.</p></div>'

    parts = ['<div class="business-card">']
    if is_safe_url(profile.profile_image):
        parts.append(
            f'<img class="card-image" src="{html_mod.escape(profile.profile_image.strip())}" '
            f'alt="{html_mod.escape(profile.full_name)}">'
        )
    parts.append(f'<h2 class="card-name">{html_mod.escape(profile.full_name)}</h2>')
    for title in profile.job_titles:
        parts.append(f'<p class="card-title">{html_mod.escape(title)}</p>')
    if profile.location:
        parts.append(f'<p class="card-location">{html_mod.escape(profile.location)}</p>')

    contacts = _contact_lines(profile)
    if contacts:
        parts.append(f'<div class="card-contact">{"".join(contacts)}</div>')

    if profile.short_bio:
        parts.append(f'<p class="card-bio">{html_mod.escape(profile.short_bio)}</p>')
    parts.append("</div>")
    return "".join(parts)


def render_profile_details(profile: Profile | None) -> str:
    """Long-form profile: full bio, summary, skills, languages, education."""
    if profile is None:
        return ""

    sections = []
    if profile.executive_summary:
        sections.append(
            '<section class="profile-summary"><h3>Executive Summary</h3>'
            f"<p>{html_mod.escape(profile.executive_summary)}</p></section>"
        )
    if profile.full_bio:
        paragraphs = "".join(
            f"<p>{html_mod.escape(p.strip())}</p>"
            for p in profile.full_bio.split("\n\n")
            if p.strip()
        )
        sections.append(f'<section class="profile-bio"><h3>About</h3>{paragraphs}</section>')
    for heading, items, css in (
        ("Skills", profile.skills, "profile-skills"),
        ("Languages", profile.languages, "profile-languages"),
    ):
        if items:
            pills = "".join(f'<li class="tag-pill">{html_mod.escape(s)}</li>' for s in items)
            sections.append(f'<section class="{css}"><h3>{heading}</h3><ul>{pills}</ul></section>')
    if profile.education:
        sections.append(
            '<section class="profile-education"><h3>Education</h3>'
            f"<p>{html_mod.escape(profile.education)}</p></section>"
        )
    return "".join(sections)
