"""
FastAPI Endpoints for the Lead Qualifier
========================================
RESTful API for offer intake, lead upload, scoring and export.

Base URL: http://localhost:8000

Endpoints:
- GET  /                          - API info
- GET  /api/health                - Health check
- POST /api/offer                 - Create/replace the active offer
- GET  /api/offer                 - Get the active offer
- POST /api/leads/upload          - Upload a CSV of leads
- POST /api/score                 - Score uploaded leads against the offer
- GET  /api/results               - Get scored leads
- GET  /api/export/csv            - Download scored leads as CSV
- GET  /api/stats                 - Get engine statistics
"""

import io
import logging
from datetime import datetime

from fastapi import FastAPI, HTTPException, Depends, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from ..models.schemas import (
    Offer,
    ApiResponse,
    UploadSummary,
    ScoreSummary,
    ScoringStats,
)
from ..config.settings import BATCH_CONFIG, LLM_CONFIG
from ..engine import LeadScoringEngine
from ..llm.completion import is_api_key_configured
from ..session import ScoringSession, MissingPreconditionError
from ..utils.csv_io import parse_leads_csv, export_scored_leads_csv, LeadIngestionError

logger = logging.getLogger(__name__)


# =============================================================================
# FastAPI App Initialization
# =============================================================================

app = FastAPI(
    title="Lead Qualifier API",
    description="""
## Lead Qualification & Intent Scoring

Scores uploaded leads against a product offer.

### Scoring:
- **Rule score (0-50)**: role seniority, industry fit, profile completeness
- **AI score (0-50)**: buying-intent classification of the lead vs. the offer
- **Intent**: High (70+), Medium (40-69), Low (<40)

### Quick Start:
1. `POST /api/offer` with your offer
2. `POST /api/leads/upload` with a CSV of leads
3. `POST /api/score`, then `GET /api/results` or `GET /api/export/csv`
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - Allow all origins for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Session & Engine Initialization
# =============================================================================

# Single in-memory session (no persistence)
default_session = ScoringSession()
default_engine = LeadScoringEngine()


def get_session() -> ScoringSession:
    return default_session


def get_engine() -> LeadScoringEngine:
    return default_engine


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.get("/", tags=["Info"])
async def root():
    """API information and available endpoints"""
    return {
        "service": "Lead Qualifier",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "health": "GET /api/health",
            "offer": "POST /api/offer",
            "upload": "POST /api/leads/upload",
            "score": "POST /api/score",
            "results": "GET /api/results",
            "export": "GET /api/export/csv",
        }
    }


@app.get("/api/health", tags=["Info"])
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "lead-qualification-api",
        "version": "1.0.0",
        "timestamp": datetime.utcnow().isoformat(),
        "llm_configured": is_api_key_configured(LLM_CONFIG.get("api_key")),
    }


# =============================================================================
# Offer Endpoints
# =============================================================================

@app.post("/api/offer", status_code=201, response_model=ApiResponse, tags=["Offer"])
async def create_offer(offer: Offer, session: ScoringSession = Depends(get_session)):
    """Store the product/offer that leads are scored against"""
    session.set_offer(offer)
    return ApiResponse(message="Offer created successfully", data=offer)


@app.get("/api/offer", response_model=ApiResponse, tags=["Offer"])
async def get_offer(session: ScoringSession = Depends(get_session)):
    """Get the active offer"""
    return ApiResponse(data=session.require_offer(status_code=404))


# =============================================================================
# Lead Endpoints
# =============================================================================

@app.post("/api/leads/upload", response_model=ApiResponse, tags=["Leads"])
async def upload_leads(
    file: UploadFile = File(...),
    session: ScoringSession = Depends(get_session),
):
    """
    Upload a CSV of leads

    Required columns: name, role, company, industry, location, linkedin_bio.
    Replaces any previously uploaded leads and clears their results.
    """
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are allowed")

    limit = BATCH_CONFIG["max_upload_bytes"]
    if file.size is not None and file.size > limit:
        raise HTTPException(status_code=400, detail="File exceeds the 10MB upload limit")

    # Read at most one byte past the limit; size may be unknown for streamed parts
    contents = await file.read(limit + 1)
    if len(contents) > limit:
        raise HTTPException(status_code=400, detail="File exceeds the 10MB upload limit")

    leads = parse_leads_csv(contents)
    if not leads:
        raise HTTPException(status_code=400, detail="CSV file contains no valid leads")

    session.set_leads(leads)
    logger.info(f"Uploaded {len(leads)} leads")

    return ApiResponse(
        message=f"Successfully uploaded {len(leads)} leads",
        data=UploadSummary(count=len(leads), sample=leads[:BATCH_CONFIG["upload_sample_size"]]),
    )


@app.post("/api/score", response_model=ApiResponse, tags=["Scoring"])
def score_leads(
    session: ScoringSession = Depends(get_session),
    engine: LeadScoringEngine = Depends(get_engine),
):
    """
    Score the uploaded leads against the active offer

    Results are sorted by score (highest first) and replace any
    previous results.
    """
    leads = session.require_leads()
    offer = session.require_offer()

    logger.info(f"Starting scoring for {len(leads)} leads")
    results = engine.score_batch(leads, offer)
    session.set_results(results)

    stats = ScoringStats.from_results(results)
    logger.info(f"Scoring complete: {stats.model_dump()}")

    return ApiResponse(
        message="Leads scored successfully",
        data=ScoreSummary(stats=stats, top_leads=results[:BATCH_CONFIG["top_leads_size"]]),
    )


@app.get("/api/results", response_model=ApiResponse, tags=["Scoring"])
async def get_results(session: ScoringSession = Depends(get_session)):
    """Get all scored leads"""
    return ApiResponse(data=session.require_results())


@app.get("/api/export/csv", tags=["Scoring"])
async def export_results_csv(session: ScoringSession = Depends(get_session)):
    """Download scored leads as CSV"""
    results = session.require_results()
    content = export_scored_leads_csv(results)
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=scored_leads.csv"},
    )


# =============================================================================
# Statistics
# =============================================================================

@app.get("/api/stats", tags=["Info"])
async def get_stats(engine: LeadScoringEngine = Depends(get_engine)):
    """Get engine statistics"""
    return {"engine": engine.get_stats()}


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(MissingPreconditionError)
async def precondition_exception_handler(request, exc: MissingPreconditionError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(LeadIngestionError)
async def ingestion_exception_handler(request, exc: LeadIngestionError):
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.exception("Unhandled API error")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        }
    )
