"""
Club Config - paramètres du service
"""
from datetime import date
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from licensing.models import ClubInfo
from licensing.stock import STOCK_CRITICAL_THRESHOLD, STOCK_LOW_THRESHOLD


class ClubSettings(BaseSettings):
    """Paramètres du club et du serveur"""

    # Saison de référence (année de fin : 2026 pour 2025-2026)
    REFERENCE_SEASON: int = Field(default_factory=lambda: date.today().year)

    # Seuils d'alerte du stock disponible
    STOCK_CRITICAL_THRESHOLD: int = STOCK_CRITICAL_THRESHOLD
    STOCK_LOW_THRESHOLD: int = STOCK_LOW_THRESHOLD

    # Informations du club (variables des modèles de mails)
    CLUB_NAME: str = "Trapel Football Club"
    CLUB_ADDRESS: str = "Adresse à compléter"
    CLUB_EMAIL: str = ""
    CLUB_PHONE: str = ""

    # Serveur
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def club_info(self) -> ClubInfo:
        return ClubInfo(
            name=self.CLUB_NAME,
            address=self.CLUB_ADDRESS,
            email=self.CLUB_EMAIL or None,
            phone=self.CLUB_PHONE or None,
        )


@lru_cache()
def get_club_settings() -> ClubSettings:
    return ClubSettings()
