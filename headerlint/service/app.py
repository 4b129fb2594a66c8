"""FastAPI application entrypoint for headerlint service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..fixer import FixerError
from ..models import FileReport
from ..runner import Runner


class CheckRequest(BaseModel):
    filename: str
    content: str
    fix: bool = False


class DiagnosticModel(BaseModel):
    severity: str
    message: str
    code: str
    line: int
    column: int
    fixable: bool
    fixed: bool


class CheckResponse(BaseModel):
    status: Optional[str] = None
    skipped: bool = False
    errors: int
    warnings: int
    diagnostics: List[DiagnosticModel]
    metrics: Dict[str, str]
    fixed_content: Optional[str] = None
    fix_count: int = 0


class HealthResponse(BaseModel):
    status: str
    repository: Optional[str] = None


def _to_response(report: FileReport) -> CheckResponse:
    return CheckResponse(
        status=report.status.value if report.status else None,
        skipped=report.skipped,
        errors=len(report.errors),
        warnings=len(report.warnings),
        diagnostics=[DiagnosticModel(**d.to_dict()) for d in report.diagnostics],
        metrics=report.metrics,
        fixed_content=report.fixed,
        fix_count=report.fix_count,
    )


def create_app(runner_factory: Callable[[], Runner]) -> FastAPI:
    """Create the FastAPI application exposing header checks."""

    app = FastAPI(title="headerlint", version="1.0.0")

    async def get_runner() -> Runner:
        return runner_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health(runner: Runner = Depends(get_runner)) -> HealthResponse:
        return HealthResponse(status="ok", repository=runner.repository.slug)

    @app.post("/check", response_model=CheckResponse)
    async def check(
        payload: CheckRequest,
        runner: Runner = Depends(get_runner),
    ) -> CheckResponse:
        def _run_check() -> FileReport:
            return runner.check_source(payload.filename, payload.content, fix=payload.fix)

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run_check)
        return _to_response(report)

    @app.exception_handler(FixerError)
    async def fixer_error_handler(_: Any, exc: FixerError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    root: Path = Path("."), host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    try:
        import uvicorn
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    # Configuration and identity are resolved once and shared by every request.
    runner = Runner(root)

    app = create_app(lambda: runner)
    uvicorn.run(app, host=host, port=port)
