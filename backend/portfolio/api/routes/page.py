"""
Public page payload: everything the landing page renders in one response
"""
from collections import defaultdict
from typing import Dict, List

from fastapi import APIRouter, Depends

from portfolio.api.deps import get_storage
from portfolio.api.routing import route_kwargs
from portfolio.components.contracts import PortfolioPage, SocialLink, api
from portfolio.components.entities import (ProfilePublic, ProjectPublic,
                                           SkillPublic, SocialPublic)
from portfolio.components.icons import glyph_for_social
from portfolio.services.storage import StorageService

router = APIRouter(tags=["portfolio"])


@router.get(api.portfolio.page.route_path, **route_kwargs(api.portfolio.page))
def portfolio_page(storage: StorageService = Depends(get_storage)):
    profile = storage.get_profile()

    skills_by_category: Dict[str, List[SkillPublic]] = defaultdict(list)
    for skill in storage.get_skills():
        skills_by_category[skill.category].append(SkillPublic.model_validate(skill))

    socials = []
    for social in storage.get_socials(active_only=True):
        public = SocialPublic.model_validate(social)
        socials.append(SocialLink(
            **public.model_dump(),
            glyph=glyph_for_social(social.platform, social.icon),
        ))

    return PortfolioPage(
        profile=ProfilePublic.model_validate(profile) if profile else None,
        skills_by_category=dict(skills_by_category),
        projects=[ProjectPublic.model_validate(p) for p in storage.get_projects()],
        socials=socials,
    )
