"""
Inscriptions du club - serveur FastAPI

API JSON sans état : les données (catalogue, licenciés, stock) sont fournies
par l'appelant à chaque requête.
"""
from datetime import date

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from loguru import logger

from app.club import club_router
from app.club.config import ClubSettings
from app.club.dependencies import get_settings
from app.club.models import StatusResponse

# Environment variables
load_dotenv()

VERSION = "1.0.0"

app = FastAPI(
    title="Club Inscriptions",
    description="Catégories, montants dus et stock des inscriptions du club",
    version=VERSION
)

app.include_router(club_router)


@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    logger.info(
        f"✅ Serveur démarré - saison de référence "
        f"{settings.REFERENCE_SEASON - 1}-{settings.REFERENCE_SEASON}"
    )


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Serveur arrêté")


@app.get("/api/status", response_model=StatusResponse)
async def get_status(settings: ClubSettings = Depends(get_settings)):
    """État du service"""
    return StatusResponse(
        status="ok",
        version=VERSION,
        reference_season=settings.REFERENCE_SEASON,
        today=date.today()
    )


# ==================== Lancement ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
