"""
Admin API - listing, taxonomy and company management.

Every route requires an admin session token (``role == "admin"``).

Jobs:
    GET    /admin/jobs                   listing including inactive jobs
    POST   /admin/jobs                   create
    PATCH  /admin/jobs/{id}              update
    DELETE /admin/jobs/{id}              delete
    PUT    /admin/jobs/{id}/share-image  attach share image / QR code URLs

Taxonomy and companies:
    /admin/companies, /admin/domains, /admin/skills (create, update, delete)

Other:
    POST /admin/uploads/image            store an image, returns its URL
    GET  /admin/stats                    dashboard totals
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse

from jobboard.api.deps import get_job_service, get_storage, get_taxonomy_service
from jobboard.auth import require_admin
from jobboard.config import get_settings
from jobboard.exceptions import BlobStorageError
from jobboard.schemas import (
    ActionResult,
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    DomainCreate,
    DomainResponse,
    DomainUpdate,
    JobCreate,
    JobListResponse,
    JobResponse,
    JobUpdate,
    ShareImageUpdate,
    SkillCreate,
    SkillResponse,
    SkillUpdate,
    SubdomainCreate,
    SubdomainResponse,
)
from jobboard.services.blob_storage import BlobStorage
from jobboard.services.filters import parse_filter_params
from jobboard.services.job_service import JobService
from jobboard.services.taxonomy import TaxonomyService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


# ==================== Jobs ====================

@router.get("/jobs", response_model=JobListResponse)
async def list_all_jobs(
    request: Request,
    service: JobService = Depends(get_job_service),
):
    settings = get_settings()
    filters = parse_filter_params(
        request.query_params.multi_items(),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    return await service.search(filters, include_inactive=True)


@router.post("/jobs", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    data: JobCreate,
    service: JobService = Depends(get_job_service),
    taxonomy: TaxonomyService = Depends(get_taxonomy_service),
):
    job = await service.create_job(data)
    await taxonomy.invalidate_popular()
    return job


@router.patch("/jobs/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    data: JobUpdate,
    service: JobService = Depends(get_job_service),
    taxonomy: TaxonomyService = Depends(get_taxonomy_service),
):
    job = await service.update_job(job_id, data)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    await taxonomy.invalidate_popular()
    return job


@router.delete("/jobs/{job_id}", response_model=ActionResult)
async def delete_job(
    job_id: str,
    service: JobService = Depends(get_job_service),
    taxonomy: TaxonomyService = Depends(get_taxonomy_service),
):
    if not await service.delete_job(job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    await taxonomy.invalidate_popular()
    return ActionResult(success=True, message="Job deleted")


@router.put("/jobs/{job_id}/share-image", response_model=JobResponse)
async def set_share_image(
    job_id: str,
    data: ShareImageUpdate,
    service: JobService = Depends(get_job_service),
):
    job = await service.set_share_image(job_id, data.image_url, data.qr_code_url)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


# ==================== Companies ====================

@router.post("/companies", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    data: CompanyCreate,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return await service.create_company(data)


@router.patch("/companies/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: str,
    data: CompanyUpdate,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    company = await service.update_company(company_id, data)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.delete("/companies/{company_id}", response_model=ActionResult)
async def delete_company(
    company_id: str,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    if not await service.delete_company(company_id):
        raise HTTPException(status_code=404, detail="Company not found")
    return ActionResult(success=True, message="Company deleted")


# ==================== Domains ====================

@router.post("/domains", response_model=DomainResponse, status_code=status.HTTP_201_CREATED)
async def create_domain(
    data: DomainCreate,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return await service.create_domain(data)


@router.patch("/domains/{domain_id}", response_model=DomainResponse)
async def update_domain(
    domain_id: str,
    data: DomainUpdate,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    domain = await service.update_domain(domain_id, data)
    if not domain:
        raise HTTPException(status_code=404, detail="Domain not found")
    return domain


@router.post(
    "/domains/{domain_id}/subdomains",
    response_model=SubdomainResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_subdomain(
    domain_id: str,
    data: SubdomainCreate,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    subdomain = await service.add_subdomain(domain_id, data)
    if not subdomain:
        raise HTTPException(status_code=404, detail="Domain not found")
    return subdomain


@router.delete("/domains/{domain_id}", response_model=ActionResult)
async def delete_domain(
    domain_id: str,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    if not await service.delete_domain(domain_id):
        raise HTTPException(status_code=404, detail="Domain not found")
    return ActionResult(success=True, message="Domain deleted")


# ==================== Skills ====================

@router.post("/skills", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def create_skill(
    data: SkillCreate,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return await service.create_skill(data)


@router.patch("/skills/{skill_id}", response_model=SkillResponse)
async def update_skill(
    skill_id: str,
    data: SkillUpdate,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    skill = await service.update_skill(skill_id, data)
    if not skill:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill


@router.delete("/skills/{skill_id}", response_model=ActionResult)
async def delete_skill(
    skill_id: str,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    if not await service.delete_skill(skill_id):
        raise HTTPException(status_code=404, detail="Skill not found")
    return ActionResult(success=True, message="Skill deleted")


# ==================== Uploads ====================

@router.post("/uploads/image")
async def upload_image(
    image: Optional[UploadFile] = File(None),
    storage: BlobStorage = Depends(get_storage),
):
    if image is None or not image.filename:
        return JSONResponse(status_code=400, content={"error": "No image provided"})

    content_type = image.content_type or ""
    if not content_type.startswith("image/"):
        return JSONResponse(status_code=400, content={"error": "File must be an image"})

    try:
        data = await image.read()
        url = await storage.put(storage.object_name(image.filename), data, content_type)
    except BlobStorageError as e:
        logger.error(f"Error uploading image: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to upload image"})

    return {"url": url, "success": True}


# ==================== Stats ====================

@router.get("/stats")
async def get_stats(service: JobService = Depends(get_job_service)):
    return await service.stats()
