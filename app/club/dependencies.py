"""
Club Dependencies

Paramètres et saison de référence des requêtes
"""

from typing import Optional

from fastapi import Depends, Query

from .config import ClubSettings, get_club_settings


def get_settings() -> ClubSettings:
    """Paramètres du club (surchargeables dans les tests)"""
    return get_club_settings()


def get_reference_season(
    season: Optional[int] = Query(
        None, ge=1900, le=2200, description="Saison de référence (année de fin)"
    ),
    settings: ClubSettings = Depends(get_settings)
) -> int:
    """Saison demandée, sinon celle des paramètres"""
    if season is not None:
        return season
    return settings.REFERENCE_SEASON
