"""
Inscriptions du club - point d'entrée
"""
import sys

import uvicorn
from loguru import logger

from app.club.config import get_club_settings


def setup_logging(level: str = "INFO"):
    """Sorties des logs : console + fichier journalier"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level
    )
    logger.add(
        "logs/inscriptions_{time:YYYY-MM-DD}.log",
        rotation="1 day",
        retention="30 days",
        level="DEBUG"
    )


def main():
    settings = get_club_settings()
    setup_logging(settings.LOG_LEVEL)
    logger.info(f"Démarrage sur {settings.HOST}:{settings.PORT}")

    uvicorn.run(
        "app.server:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
