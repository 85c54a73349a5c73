"""
ScanService: drives a scan job through its lifecycle in the job store.

Queued (submit) -> Pending (run starts) -> Finished with a report, or Failed
with the error message. The scan itself is supplied by the caller.
"""
import logging
from typing import Awaitable, Callable, List, Optional

from api.schemas import Artifact, ScanReport
from engine.job_store import RedisJobStore
from engine.models import ScanJob, ScanJobStatus
from tools.base import ReportTransformer
from tools.trivy_models import TrivyVulnerability
from utils.report_stats import calculate_vulnerability_stats

logger = logging.getLogger(__name__)

ScanFunc = Callable[[], Awaitable[List[TrivyVulnerability]]]


class ScanService:
    def __init__(self, store: RedisJobStore, transformer: ReportTransformer):
        self.store = store
        self.transformer = transformer

    async def submit(self, job_id: str) -> ScanJob:
        job = ScanJob(id=job_id, status=ScanJobStatus.QUEUED)
        await self.store.create(job)
        logger.info(f"[job_id={job_id}] Submitted scan job.")
        return job

    async def run(self, job_id: str, artifact: Artifact, scan: ScanFunc) -> ScanReport:
        await self.store.update_status(job_id, ScanJobStatus.PENDING)
        logger.info(f"[job_id={job_id}] Started scan job. repository={artifact.repository} digest={artifact.digest}")
        try:
            vulnerabilities = await scan()
            report = self.transformer.transform(artifact, vulnerabilities)
            await self.store.update_report(job_id, report)
            await self.store.update_status(job_id, ScanJobStatus.FINISHED)
        except Exception as e:
            logger.error(f"[job_id={job_id}] Scan job failed: {e}")
            await self.store.update_status(job_id, ScanJobStatus.FAILED, str(e))
            raise

        logger.info(f"[job_id={job_id}] Completed scan job. stats={calculate_vulnerability_stats(report)}")
        return report

    async def get_report(self, job_id: str) -> Optional[ScanReport]:
        job = await self.store.get(job_id)
        if job is None:
            return None
        return job.report
