# backend/app/main.py
from fastapi import FastAPI

from backend.app.api.analysis import router as analysis_router
from backend.app.api.drafts import router as drafts_router
from backend.app.api.run import router as run_router
from inbox_triage.config.logging import setup_logging

setup_logging()

app = FastAPI(title="inbox-triage API")
app.include_router(analysis_router, prefix="/api")
app.include_router(drafts_router, prefix="/api")
app.include_router(run_router, prefix="/api")


@app.get("/health", include_in_schema=False)
def health() -> dict:
    return {"status": "ok"}
