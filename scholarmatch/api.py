"""HTTP API for ScholarMatch."""

import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from scholarmatch.errors import ConflictError, StoreError, StudentNotFoundError
from scholarmatch.explanations.orchestrator import ExplanationOrchestrator
from scholarmatch.profile.models import StudentCreate
from scholarmatch.schemas import (
    ScholarshipList,
    ScholarshipListItem,
    StudentCreated,
    StudentMatchesResponse,
)
from scholarmatch.service import MatchingService
from scholarmatch.storage.repository import SqlMatchingStore

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def create_app(
    store: SqlMatchingStore,
    orchestrator: Optional[ExplanationOrchestrator] = None,
) -> FastAPI:
    """Build the FastAPI application around a store and explanation orchestrator."""
    app = FastAPI(title="ScholarMatch")
    service = MatchingService(store, orchestrator)

    @app.exception_handler(StudentNotFoundError)
    async def _not_found(request: Request, exc: StudentNotFoundError) -> JSONResponse:
        return _error(404, "Not Found", "Student not found")

    @app.exception_handler(ConflictError)
    async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
        return _error(409, "Conflict", str(exc))

    @app.exception_handler(RequestValidationError)
    async def _invalid(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        return _error(400, "ValidationError", problems)

    @app.exception_handler(StoreError)
    async def _store_failure(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return _error(500, "Internal Server Error", "An error occurred")

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.post("/students", status_code=201, response_model=StudentCreated)
    async def register_student(payload: StudentCreate) -> StudentCreated:
        student = await asyncio.to_thread(store.create_student, payload)
        return StudentCreated(
            id=student.id,
            name=student.name,
            email=student.email,
            created_at=student.created_at,
        )

    @app.get("/students/{student_id}/matches", response_model=StudentMatchesResponse)
    async def student_matches(student_id: str) -> StudentMatchesResponse:
        return await service.get_student_matches(student_id)

    @app.get("/scholarships", response_model=ScholarshipList)
    async def list_scholarships() -> ScholarshipList:
        scholarships = await asyncio.to_thread(store.list_scholarships)
        return ScholarshipList(
            scholarships=[
                ScholarshipListItem(
                    id=s.id,
                    name=s.name,
                    amount=s.amount,
                    deadline=s.deadline,
                    provider=s.provider,
                )
                for s in scholarships
            ],
            total=len(scholarships),
        )

    return app
