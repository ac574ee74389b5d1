"""Tests for portfoliocms.render.profile."""

from __future__ import annotations

from portfoliocms.render.profile import render_profile_card, render_profile_details
from portfoliocms.storage.models import Profile


def _profile(**kwargs) -> Profile:
    defaults = dict(
        full_name="Jane Doe",
        job_title_1="Reporter",
        job_title_2="Editor",
        location="Lisbon",
        email="jane@example.com",
        phone="+351 555 0100",
        linkedin="https://www.linkedin.com/in/janedoe",
        short_bio="Writes about cities.",
    )
    defaults.update(kwargs)
    return Profile(**defaults)


class TestProfileCard:
    def test_not_set_up(self):
        assert "Profile not set up yet." in render_profile_card(None)
        assert "business-card-empty" in render_profile_card(Profile())

    def test_full_card(self):
        html = render_profile_card(_profile())
        assert '<h2 class="card-name">Jane Doe</h2>' in html
        assert '<p class="card-title">Reporter</p><p class="card-title">Editor</p>' in html
        assert '<p class="card-location">Lisbon</p>' in html
        assert 'href="mailto:jane@example.com"' in html
        assert '<span class="card-phone">+351 555 0100</span>' in html
        assert 'class="card-linkedin" href="https://www.linkedin.com/in/janedoe"' in html
        assert '<p class="card-bio">Writes about cities.</p>' in html

    def test_hidden_contacts_left_out(self):
        html = render_profile_card(_profile(show_email=False, show_phone=False, show_linkedin=False))
        assert "jane@example.com" not in html
        assert "555 0100" not in html
        assert "linkedin" not in html
        assert "card-contact" not in html

    def test_unsafe_links_dropped(self):
        html = render_profile_card(
            _profile(linkedin="javascript:alert(1)", profile_image="data:image/png;base64,AA")
        )
        assert "javascript" not in html
        assert "card-image" not in html

    def test_name_escaped(self):
        assert "Jane &lt;b&gt;" in render_profile_card(_profile(full_name="Jane <b>"))


class TestProfileDetails:
    def test_sections(self):
        html = render_profile_details(_profile(
            executive_summary="Twenty years in news.",
            full_bio="First paragraph.\n\nSecond paragraph.",
            skills=["Writing", "Editing"],
            languages=["English"],
            education="BA, Journalism",
        ))
        assert "Twenty years in news." in html
        assert "<p>First paragraph.</p><p>Second paragraph.</p>" in html
        assert '<li class="tag-pill">Writing</li><li class="tag-pill">Editing</li>' in html
        assert "<h3>Languages</h3>" in html
        assert "BA, Journalism" in html

    def test_empty(self):
        assert render_profile_details(None) == ""
        assert render_profile_details(Profile(full_name="X")) == ""
