"""
Tests for the icon lookup table
"""
import pytest

from portfolio.components.icons import (FALLBACK_GLYPH, ICON_ALIASES, Glyph,
                                        glyph_for_social, resolve_glyph)


@pytest.mark.parametrize("name,glyph", [
    ("github", Glyph.GITHUB),
    ("GitHub", Glyph.GITHUB),
    ("  linkedin ", Glyph.LINKEDIN),
    ("x", Glyph.TWITTER),
    ("twitter", Glyph.TWITTER),
    ("email", Glyph.MAIL),
    ("Mail", Glyph.MAIL),
    ("website", Glyph.GLOBE),
])
def test_known_aliases(name, glyph):
    assert resolve_glyph(name) is glyph


@pytest.mark.parametrize("name", [None, "", "myspace", "unknown-thing"])
def test_fallback(name):
    assert resolve_glyph(name) is FALLBACK_GLYPH
    assert FALLBACK_GLYPH is Glyph.EXTERNAL_LINK


def test_every_alias_is_lowercase():
    assert all(alias == alias.strip().lower() for alias in ICON_ALIASES)


def test_explicit_icon_wins_over_platform():
    assert glyph_for_social("my blog", "github") is Glyph.GITHUB


def test_unknown_icon_falls_back_to_platform():
    assert glyph_for_social("linkedin", "sparkles") is Glyph.LINKEDIN
    assert glyph_for_social("linkedin", None) is Glyph.LINKEDIN


def test_glyph_serializes_as_string():
    assert Glyph.EXTERNAL_LINK.value == "external-link"
    assert Glyph("github") is Glyph.GITHUB
