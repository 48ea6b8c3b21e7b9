"""
Similarity Ranker - "similar jobs" for a job detail page.

Content-based: a candidate is any other active job sharing at least one
domain or one skill with the source job.

Scoring:
    score = |shared domains| + |shared skills|

Ordering:
    score desc, posted_date desc, id asc   (then truncated to the limit)

The overlap counts are computed in SQL: per-job hit counts from
job_domains and job_skills are UNION ALL'd and summed, so a job matching
on both a domain and a skill appears once with the combined score.

Usage:
    ranker = SimilarityRanker(session)
    jobs = await ranker.rank(job_id, limit=3)
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, select, union_all

from jobboard.models import Job, JobSkill, job_domains
from jobboard.repositories.base import BaseRepository, translate_storage_errors
from jobboard.repositories.jobs import JOB_RELATIONS

logger = logging.getLogger(__name__)


class SimilarityRanker(BaseRepository):
    """
    Ranks jobs by domain/skill overlap with a source job.

    Attributes:
        session: AsyncSession for database operations
    """

    @translate_storage_errors
    async def source_features(self, job_id: str) -> Optional[Tuple[List[str], List[str]]]:
        """
        Domain ids and skill ids of the source job.

        Returns:
            (domain_ids, skill_ids), or None when the job does not exist
        """
        exists = await self.session.execute(select(Job.id).where(Job.id == job_id))
        if exists.scalar_one_or_none() is None:
            return None

        domain_rows = await self.session.execute(
            select(job_domains.c.domain_id).where(job_domains.c.job_id == job_id)
        )
        skill_rows = await self.session.execute(
            select(JobSkill.skill_id).where(JobSkill.job_id == job_id)
        )
        return list(domain_rows.scalars().all()), list(skill_rows.scalars().all())

    @translate_storage_errors
    async def score_candidates(
        self,
        job_id: str,
        domain_ids: Sequence[str],
        skill_ids: Sequence[str],
        limit: int,
    ) -> List[Tuple[Job, int]]:
        """Top ``limit`` active jobs other than ``job_id`` with their overlap score."""
        hits = []
        if domain_ids:
            hits.append(
                select(
                    job_domains.c.job_id.label("job_id"),
                    func.count().label("hits"),
                )
                .where(job_domains.c.domain_id.in_(list(domain_ids)))
                .group_by(job_domains.c.job_id)
            )
        if skill_ids:
            hits.append(
                select(
                    JobSkill.job_id.label("job_id"),
                    func.count().label("hits"),
                )
                .where(JobSkill.skill_id.in_(list(skill_ids)))
                .group_by(JobSkill.job_id)
            )
        if not hits:
            return []

        overlap = (union_all(*hits) if len(hits) > 1 else hits[0]).subquery("overlap")
        scores = (
            select(overlap.c.job_id, func.sum(overlap.c.hits).label("score"))
            .group_by(overlap.c.job_id)
            .subquery("scores")
        )

        query = (
            select(Job, scores.c.score)
            .join(scores, scores.c.job_id == Job.id)
            .where(Job.id != job_id, Job.is_active.is_(True))
            .order_by(scores.c.score.desc(), Job.posted_date.desc(), Job.id.asc())
            .limit(limit)
            .options(*JOB_RELATIONS)
        )
        result = await self.session.execute(query)
        return [(row[0], int(row[1])) for row in result.all()]

    async def rank(self, job_id: str, limit: int = 3) -> List[Job]:
        """
        Up to ``limit`` jobs similar to ``job_id``, most similar first.

        A missing source job, a job with no domains or skills, or a
        non-positive limit all yield an empty list. The source job is never
        part of the result.
        """
        if limit <= 0:
            return []

        features = await self.source_features(job_id)
        if features is None:
            logger.info(f"Similar jobs requested for unknown job {job_id}")
            return []

        domain_ids, skill_ids = features
        ranked = await self.score_candidates(job_id, domain_ids, skill_ids, limit)
        return [job for job, _ in ranked]
