# futurehire/api/v1/users.py
"""
Protected per-user routes. Each handler acts on the identity resolved by the
Auth Gate only.
"""
from typing import Any
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from pydantic import BaseModel

from futurehire.api.v1.deps import (
    AuthContext,
    get_current_identity,
    get_record_service,
    get_resume_analyzer,
    get_store,
)
from futurehire.core.errors import IdentityNotFound
from futurehire.models.identity import IdentityPublic
from futurehire.repositories.users import CredentialStore
from futurehire.services.records import UserRecordService
from futurehire.services.resume_analysis import ResumeAnalyzer

router = APIRouter(prefix="/api", tags=["user"])

class SubmitIn(BaseModel):
    answers: Any = None

class SubmitOut(BaseModel):
    score: int
    answers: Any = None

@router.get("/user/profile", response_model=IdentityPublic)
async def profile(
    ctx: AuthContext = Depends(get_current_identity),
    store: CredentialStore = Depends(get_store),
):
    identity = await store.find_by_id(ctx.identity_id)
    if identity is None:
        raise IdentityNotFound(ctx.identity_id)
    return identity.public()

@router.post("/tests/{test_id}/submit", response_model=SubmitOut)
async def submit_test(
    test_id: str,
    payload: SubmitIn,
    ctx: AuthContext = Depends(get_current_identity),
    records: UserRecordService = Depends(get_record_service),
):
    attempt = await records.record_test_attempt(ctx.identity_id, test_id, payload.answers)
    return attempt.result

@router.post("/resume-analyze")
async def resume_analyze(
    request: Request,
    resume: UploadFile = File(...),
    ctx: AuthContext = Depends(get_current_identity),
    records: UserRecordService = Depends(get_record_service),
    analyzer: ResumeAnalyzer = Depends(get_resume_analyzer),
):
    fname = resume.filename or ""
    if not fname.lower().endswith(request.app.state.settings.resume_extensions):
        raise HTTPException(status_code=400, detail="Unsupported file type")
    content = await resume.read()
    analysis = await analyzer.analyze(fname, content)
    return await records.set_resume_analysis(ctx.identity_id, analysis)
