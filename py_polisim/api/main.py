"""FastAPI main application."""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from sqlalchemy import text
from typing import List, Optional
import logging
import structlog
from datetime import datetime

from ..config import settings
from ..db.connection import db
from ..db.models import CampaignRecord, SavedPolitician
from ..core.campaign import CampaignController, start_campaign
from ..core.models import Campaign, ElectionInstance, GameDate, NewsItem, Politician
from ..core.scoring import normalize_polling

# Configure logging
logging.basicConfig(format="%(message)s", level=getattr(logging, settings.log_level.upper(), logging.INFO))
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Political Simulation API",
    description="Procedural cities, elections and monthly campaign simulation",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

MAX_MONTHS_PER_TICK = 24


# Request/Response models
class CampaignCreateRequest(BaseModel):
    """Request to start a new campaign."""

    seed: Optional[str] = Field(None, description="Seed for reproducible generation")
    name: Optional[str] = Field(None, description="Save name; defaults to the city name")
    country_id: Optional[str] = Field(None, description="Country code, e.g. USA or GER")
    population: Optional[int] = Field(None, ge=400, le=20000000, description="City population")
    player_name: Optional[str] = Field(None, description="Player's full name")
    player_party_id: Optional[str] = Field(None, description="Party to join; independent when omitted")
    player_is_mayor: bool = Field(False, description="Start the player in the city's executive office")


class CampaignSummary(BaseModel):
    """Summary information about a campaign."""

    id: str
    name: str
    seed: str
    country_id: str
    city_name: str
    current_date: GameDate
    months_elapsed: int
    player_name: str
    player_approval: int
    upcoming_elections: int


class TickResponse(BaseModel):
    """Campaign state after one or more months."""

    campaign: CampaignSummary
    news: List[NewsItem]


class PollingRequest(BaseModel):
    """Candidates to convert from base scores into polling."""

    candidates: List[Politician]
    adult_population: int = Field(..., ge=0)


class SavedPoliticianSummary(BaseModel):
    id: str
    name: str
    party_name: Optional[str]
    created_at: Optional[datetime] = None


def _summary(campaign: Campaign, name: Optional[str] = None) -> CampaignSummary:
    return CampaignSummary(
        id=campaign.id,
        name=name or campaign.city.name,
        seed=campaign.seed,
        country_id=campaign.country_id,
        city_name=campaign.city.name,
        current_date=campaign.current_date,
        months_elapsed=campaign.months_elapsed,
        player_name=campaign.player.name,
        player_approval=campaign.player.approval_rating,
        upcoming_elections=sum(1 for e in campaign.elections if e.outcome.status == "upcoming"),
    )


def _load_record(session, campaign_id: str) -> CampaignRecord:
    record = session.query(CampaignRecord).filter(CampaignRecord.id == campaign_id).first()
    if not record:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return record


# Event handlers
@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    logger.info("Starting Political Simulation API")
    db.initialize()
    logger.info("API startup complete")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Political Simulation API")


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Political Simulation API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        with db.get_session() as session:
            session.execute(text("SELECT 1"))

        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error("Health check failed", error=str(e))
        raise HTTPException(status_code=503, detail="Service unhealthy")


@app.post("/campaigns", response_model=CampaignSummary)
async def create_campaign(request: CampaignCreateRequest):
    """Generate and save a new campaign."""
    campaign = start_campaign(
        seed=request.seed,
        country_id=request.country_id,
        population=request.population,
        player_name=request.player_name,
        player_party_id=request.player_party_id,
        player_is_mayor=request.player_is_mayor,
    )
    name = request.name or campaign.city.name

    with db.get_session() as session:
        session.add(
            CampaignRecord(
                id=campaign.id,
                seed=campaign.seed,
                name=name,
                country_id=campaign.country_id,
                months_elapsed=campaign.months_elapsed,
                snapshot_json=campaign.model_dump_json(),
            )
        )

    logger.info("Campaign saved", campaign_id=campaign.id, name=name)
    return _summary(campaign, name)


@app.get("/campaigns/{campaign_id}", response_model=Campaign)
async def get_campaign(campaign_id: str):
    """Full campaign state."""
    with db.get_session() as session:
        record = _load_record(session, campaign_id)
        return Campaign.model_validate_json(record.snapshot_json)


@app.post("/campaigns/{campaign_id}/tick", response_model=TickResponse)
async def tick_campaign(campaign_id: str, months: int = Query(1, ge=1, le=MAX_MONTHS_PER_TICK)):
    """
    Advance a campaign by whole months.

    Each month draws from a stream seeded by the campaign seed and month
    number, so replaying a save gives the same history.
    """
    with db.get_session() as session:
        record = _load_record(session, campaign_id)
        campaign = Campaign.model_validate_json(record.snapshot_json)
        news_before = len(campaign.news)

        for _ in range(months):
            campaign = CampaignController.for_month(campaign).advance_month(campaign)

        record.snapshot_json = campaign.model_dump_json()
        record.months_elapsed = campaign.months_elapsed
        name = record.name

    logger.info("Campaign advanced", campaign_id=campaign_id, months=months)
    return TickResponse(campaign=_summary(campaign, name), news=campaign.news[news_before:])


@app.get("/campaigns/{campaign_id}/elections", response_model=List[ElectionInstance])
async def get_campaign_elections(campaign_id: str, status: Optional[str] = None):
    """Elections in a campaign, optionally filtered by outcome status."""
    with db.get_session() as session:
        record = _load_record(session, campaign_id)
        campaign = Campaign.model_validate_json(record.snapshot_json)

    elections = campaign.elections
    if status:
        elections = [e for e in elections if e.outcome.status == status]
    return elections


@app.post("/polling/normalize", response_model=List[Politician])
async def normalize_candidate_polling(request: PollingRequest):
    """Turn base scores and name recognition into polling that sums to 100."""
    return normalize_polling(request.candidates, request.adult_population)


@app.post("/politicians/saved", response_model=SavedPoliticianSummary)
async def save_politician(politician: Politician):
    """Keep a politician for reuse in later campaigns."""
    with db.get_session() as session:
        record = SavedPolitician(
            id=politician.id,
            name=politician.name,
            party_name=politician.party_name,
            data_json=politician.model_dump_json(),
        )
        session.add(record)

    logger.info("Politician saved", politician_id=politician.id)
    return SavedPoliticianSummary(id=politician.id, name=politician.name, party_name=politician.party_name)


@app.get("/politicians/saved", response_model=List[SavedPoliticianSummary])
async def list_saved_politicians():
    """List saved politicians, newest first."""
    with db.get_session() as session:
        records = session.query(SavedPolitician).order_by(SavedPolitician.created_at.desc()).all()

        return [
            SavedPoliticianSummary(
                id=r.id,
                name=r.name,
                party_name=r.party_name,
                created_at=r.created_at,
            )
            for r in records
        ]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
