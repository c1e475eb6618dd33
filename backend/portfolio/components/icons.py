"""
Static icon lookup for social links and skills.

Free-text platform or icon names are resolved case-insensitively against
``ICON_ALIASES``. Anything unrecognized, including empty or missing names,
falls back to ``Glyph.EXTERNAL_LINK``.
"""
from enum import Enum
from typing import Dict, Optional


class Glyph(str, Enum):
    """Glyphs the public page knows how to draw"""
    GITHUB = "github"
    GITLAB = "gitlab"
    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    MAIL = "mail"
    GLOBE = "globe"
    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    CODE = "code"
    DATABASE = "database"
    SERVER = "server"
    LAYOUT = "layout"
    TERMINAL = "terminal"
    WRENCH = "wrench"
    USERS = "users"
    EXTERNAL_LINK = "external-link"


FALLBACK_GLYPH = Glyph.EXTERNAL_LINK

ICON_ALIASES: Dict[str, Glyph] = {
    "github": Glyph.GITHUB,
    "gh": Glyph.GITHUB,
    "gitlab": Glyph.GITLAB,
    "linkedin": Glyph.LINKEDIN,
    "twitter": Glyph.TWITTER,
    "x": Glyph.TWITTER,
    "email": Glyph.MAIL,
    "mail": Glyph.MAIL,
    "e-mail": Glyph.MAIL,
    "website": Glyph.GLOBE,
    "web": Glyph.GLOBE,
    "globe": Glyph.GLOBE,
    "blog": Glyph.GLOBE,
    "youtube": Glyph.YOUTUBE,
    "instagram": Glyph.INSTAGRAM,
    "facebook": Glyph.FACEBOOK,
    "code": Glyph.CODE,
    "frontend": Glyph.LAYOUT,
    "layout": Glyph.LAYOUT,
    "backend": Glyph.SERVER,
    "server": Glyph.SERVER,
    "database": Glyph.DATABASE,
    "db": Glyph.DATABASE,
    "terminal": Glyph.TERMINAL,
    "tool": Glyph.WRENCH,
    "wrench": Glyph.WRENCH,
    "soft": Glyph.USERS,
    "users": Glyph.USERS,
    "external-link": Glyph.EXTERNAL_LINK,
}


def resolve_glyph(name: Optional[str]) -> Glyph:
    """Map a free-text icon or platform name to a glyph"""
    if not name:
        return FALLBACK_GLYPH
    return ICON_ALIASES.get(name.strip().lower(), FALLBACK_GLYPH)


def glyph_for_social(platform: Optional[str], icon: Optional[str] = None) -> Glyph:
    """An explicit icon wins over the platform name"""
    if icon:
        glyph = resolve_glyph(icon)
        if glyph is not FALLBACK_GLYPH:
            return glyph
    return resolve_glyph(platform)
