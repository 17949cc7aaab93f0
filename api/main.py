from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import log
from core.db import Database
from core.settings import load_settings
from leads import router as leads_router
from leads.service import LeadServiceError

settings = load_settings()
log.configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, shared by every request through get_database.
    app.state.db = await Database.connect(settings)
    try:
        yield
    finally:
        await app.state.db.close()
        app.state.db = None


app = FastAPI(lifespan=lifespan)

# The browser client may be served from anywhere.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LeadServiceError)
async def lead_service_error_handler(_: Request, exc: LeadServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.include_router(leads_router.router, tags=["leads"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "lead service api"}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
