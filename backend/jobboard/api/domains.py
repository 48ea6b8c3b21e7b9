from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from jobboard.api.deps import get_taxonomy_service
from jobboard.schemas import DomainResponse, PopularDomainResponse
from jobboard.services.taxonomy import POPULAR_DOMAINS_LIMIT, TaxonomyService

router = APIRouter()


@router.get("", response_model=List[DomainResponse])
async def list_domains(service: TaxonomyService = Depends(get_taxonomy_service)):
    return await service.list_domains()


# Registered before /{domain_id} so "popular" is not read as an id
@router.get("/popular", response_model=List[PopularDomainResponse])
async def popular_domains(
    limit: int = Query(POPULAR_DOMAINS_LIMIT, ge=1, le=50),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return await service.popular_domains(limit)


@router.get("/by-name/{name}", response_model=DomainResponse)
async def get_domain_by_name(
    name: str,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    domain = await service.get_domain_by_name(name)
    if not domain:
        raise HTTPException(status_code=404, detail="Domain not found")
    return domain


@router.get("/{domain_id}", response_model=DomainResponse)
async def get_domain(
    domain_id: str,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    domain = await service.get_domain(domain_id)
    if not domain:
        raise HTTPException(status_code=404, detail="Domain not found")
    return domain
