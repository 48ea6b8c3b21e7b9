from fastapi import APIRouter
from jobboard.api import admin, auth, companies, domains, jobs, profile, skills

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(domains.router, prefix="/domains", tags=["domains"])
api_router.include_router(skills.router, prefix="/skills", tags=["skills"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
