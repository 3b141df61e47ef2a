# backend/app/api/run.py
from fastapi import APIRouter, HTTPException
from starlette.concurrency import run_in_threadpool

from backend.app.api.common import context_for, http_error
from backend.app.api.schemas import RunRequest
from backend.app.status import run_status_store
from inbox_triage.app.run import run_once
from inbox_triage.errors import MalformedEmail
from inbox_triage.parsing.parser import emails_from_records

router = APIRouter()


@router.post("/run")
async def run_endpoint(payload: RunRequest) -> dict:
    # The whole batch is validated before anything is triaged.
    try:
        emails = emails_from_records(payload.emails)
    except MalformedEmail as exc:
        raise http_error(exc) from exc

    ctx = context_for(payload.settings)
    run_status_store.start(len(emails))

    try:
        # Keep the event loop free while a large batch is triaged.
        summary = await run_in_threadpool(
            run_once, emails, ctx, progress_cb=run_status_store.on_progress
        )
    except Exception as exc:
        run_status_store.fail(f"{type(exc).__name__}: {exc}")
        raise HTTPException(
            status_code=500,
            detail={"code": "run_failed", "message": f"{type(exc).__name__}: {exc}"},
        ) from exc

    run_status_store.finish(summary)
    return {"ok": True, "summary": summary}


@router.get("/run/status")
async def run_status() -> dict:
    return {"ok": True, "status": run_status_store.snapshot()}
