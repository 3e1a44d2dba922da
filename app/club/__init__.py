"""
Club Registration Module

Gestion des inscriptions du club
- Catégories de licenciés et responsables légaux des mineurs
- Montants dus (packs, réductions) et paiements
- Stock disponible et attribution des équipements
"""

from .router import router as club_router
from .config import ClubSettings, get_club_settings

__all__ = [
    "club_router",
    "ClubSettings",
    "get_club_settings",
]
