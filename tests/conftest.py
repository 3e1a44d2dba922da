"""
Pytest configuration and fixtures for club registration tests
"""

import pytest
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from licensing.models import (
    Licensee,
    LicenseeCategory,
    Pack,
    Reduction,
    StockEntry,
)


@pytest.fixture(scope="session")
def reference_season():
    """Saison 2025-2026"""
    return 2026


@pytest.fixture(scope="function")
def categories():
    """Catalogue de catégories avec descriptions de la saison 2026"""
    return [
        LicenseeCategory(id="lc-u7g", name="U6-U7 G", description="Né en 2019 ou 2020", color="#60a5fa"),
        LicenseeCategory(id="lc-u9f", name="U9 F", description="Née en 2017", color="#f472b6"),
        LicenseeCategory(id="lc-u11g", name="U10-U11 G", description="Né en 2015 ou 2016", color="#2563eb"),
        LicenseeCategory(id="lc-u11f", name="U10-U11 F", description="Née en 2015 ou 2016", color="#db2777"),
        LicenseeCategory(id="lc-u18g", name="U18 G", description="Né en 2008", color="#1e3a8a"),
        LicenseeCategory(id="lc-seng", name="SENIORS G", description="Né avant ou en 2007", color="#111827"),
        LicenseeCategory(id="lc-senf", name="SENIORS F", description="Née avant ou en 2007", color="#831843"),
        LicenseeCategory(id="lc-loisirs", name="Loisirs", description="Adultes, pratique loisir", color="#16a34a"),
    ]


@pytest.fixture(scope="function")
def reduction_catalog():
    """Réductions des paramètres"""
    return [
        Reduction(id="red-fratrie", name="Fratrie", amount=0, multiplier=0.5),
        Reduction(id="red-pass", name="Pass'Sport", amount=50, note="Bon de l'État"),
        Reduction(id="red-mairie", name="Aide mairie", amount=10, multiplier=1),
    ]


@pytest.fixture(scope="function")
def pack():
    """Pack joueur"""
    return Pack(id="pack-joueur", name="Pack Joueur", price=180, composition=["Maillot", "Short", "Chaussettes"])


@pytest.fixture(scope="function")
def make_licensee():
    """Fabrique de licenciés"""
    counter = {"n": 0}

    def _make(**overrides) -> Licensee:
        counter["n"] += 1
        data = {
            "id": f"lic-{counter['n']}",
            "last_name": "Martin",
            "first_name": "Lucas",
            "sex": "male",
            "date_of_birth": date(2015, 6, 1),
            "licensee_category_id": "lc-u11g",
            "pack_id": "pack-joueur",
            "phone": "0601020304",
            "email": "famille.martin@orange.fr",
            "registration_date": date(2025, 9, 6),
        }
        data.update(overrides)
        return Licensee(**data)

    return _make


@pytest.fixture(scope="function")
def stock():
    """Stock géré"""
    return [
        StockEntry(equipment_name="Maillot", size_name="M", quantity=5),
        StockEntry(equipment_name="Maillot", size_name="L", quantity=1),
        StockEntry(equipment_name="Short", size_name="M", quantity=0),
    ]


