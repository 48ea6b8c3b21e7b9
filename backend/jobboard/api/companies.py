from typing import List

from fastapi import APIRouter, Depends, HTTPException

from jobboard.api.deps import get_taxonomy_service
from jobboard.schemas import CompanyResponse
from jobboard.services.taxonomy import TaxonomyService

router = APIRouter()


@router.get("", response_model=List[CompanyResponse])
async def list_companies(service: TaxonomyService = Depends(get_taxonomy_service)):
    return await service.list_companies()


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    company = await service.get_company(company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company
