from jobboard.models.company import Company
from jobboard.models.taxonomy import Domain, Subdomain, Skill
from jobboard.models.job import Job, JobSkill, job_domains, job_subdomains
from jobboard.models.application import Application, SavedJob

__all__ = [
    "Company",
    "Domain",
    "Subdomain",
    "Skill",
    "Job",
    "JobSkill",
    "job_domains",
    "job_subdomains",
    "Application",
    "SavedJob",
]
