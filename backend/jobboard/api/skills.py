"""
Skills API - skill taxonomy listing for filters and the admin job form.

    GET /skills            paginated, filterable by category and name search
    GET /skills/popular    skills used by the most active jobs
    GET /skills/by-name/{name}
    GET /skills/{skill_id}
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from jobboard.api.deps import get_taxonomy_service
from jobboard.schemas import PopularSkillResponse, SkillListResponse, SkillResponse
from jobboard.services.taxonomy import (
    DEFAULT_SKILL_PAGE_SIZE,
    POPULAR_SKILLS_LIMIT,
    TaxonomyService,
)

router = APIRouter()


@router.get("", response_model=SkillListResponse)
async def list_skills(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_SKILL_PAGE_SIZE, ge=1, le=200),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    order_by: Literal["name", "category"] = Query("name"),
    order_direction: Literal["asc", "desc"] = Query("asc"),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return await service.list_skills(
        page=page,
        page_size=page_size,
        category=category,
        search=search,
        order_by=order_by,
        order_direction=order_direction,
    )


@router.get("/popular", response_model=List[PopularSkillResponse])
async def popular_skills(
    limit: int = Query(POPULAR_SKILLS_LIMIT, ge=1, le=50),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return await service.popular_skills(limit)


@router.get("/by-name/{name}", response_model=SkillResponse)
async def get_skill_by_name(
    name: str,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    skill = await service.get_skill_by_name(name)
    if not skill:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill


@router.get("/{skill_id}", response_model=SkillResponse)
async def get_skill(
    skill_id: str,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    skill = await service.get_skill(skill_id)
    if not skill:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill
