# futurehire/services/records.py
"""
User Record Mutator.

Authorized writes to an identity's own record. The identity id always comes
from the verified token (see ``futurehire.api.v1.deps``), never from request
payloads, so one user cannot write into another user's record.
"""
import asyncio
import logging
from typing import Any, Awaitable, Dict, Optional

from futurehire.models.identity import TestAttempt, utcnow
from futurehire.repositories.users import CredentialStore
from futurehire.services.scoring import DeterministicScorer, Scorer

logger = logging.getLogger(__name__)


def _log_orphaned_write(task: "asyncio.Future[None]") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Store write failed after its request was cancelled", exc_info=exc)


async def _complete(write: Awaitable[None]) -> None:
    # a cancelled request (client disconnect) must not abandon the store write
    task = asyncio.ensure_future(write)
    try:
        await asyncio.shield(task)
    except asyncio.CancelledError:
        # nobody awaits the write any more; collect its outcome here
        task.add_done_callback(_log_orphaned_write)
        raise


class UserRecordService:

    def __init__(self, store: CredentialStore, scorer: Optional[Scorer] = None):
        self.store = store
        self.scorer = scorer or DeterministicScorer()

    async def record_test_attempt(self, identity_id: str, test_id: str, answers: Any) -> TestAttempt:
        score = self.scorer.score(test_id, answers)
        attempt = TestAttempt(
            test_id=test_id,
            result={"score": score, "answers": answers},
            submitted_at=utcnow(),
        )
        await _complete(self.store.append_test_attempt(identity_id, attempt))
        logger.info("Recorded attempt on test %s for %s (score %s)", test_id, identity_id, score)
        return attempt

    async def set_resume_analysis(self, identity_id: str, analysis: Dict[str, Any]) -> Dict[str, Any]:
        await _complete(self.store.replace_resume_analysis(identity_id, analysis))
        logger.info("Replaced resume analysis for %s", identity_id)
        return analysis
