"""
Club API Models

Corps des requêtes et réponses de l'API : chaque requête transporte
l'instantané des données nécessaires au calcul.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import Field

from licensing.models import (
    AppliedReduction,
    AssignedEquipment,
    ClubInfo,
    ClubModel,
    EmailKind,
    EmailTemplates,
    EquipmentStatus,
    IsoDate,
    Licensee,
    LicenseeCategory,
    LicenseeCreate,
    Pack,
    PaymentStatus,
    PaymentUpdate,
    Reduction,
    Sex,
    StockEntry,
)


# =============================================
# Catégories
# =============================================

class CategoryMatchRequest(ClubModel):
    """Recherche de la catégorie d'un licencié"""
    birth_date: IsoDate
    sex: Sex
    categories: List[LicenseeCategory]


class CategoryMatchResponse(ClubModel):
    """Catégorie proposée"""
    category_id: Optional[str] = None
    requires_manual_selection: bool = False


class CategoryDescriptionsRequest(ClubModel):
    """Recalcul des descriptions du catalogue"""
    categories: List[LicenseeCategory]


class CategoryDescriptionsResponse(ClubModel):
    reference_season: int
    categories: List[LicenseeCategory]


# =============================================
# Inscriptions
# =============================================

class RegistrationCheckRequest(ClubModel):
    """Contrôle d'une nouvelle inscription"""
    registration: LicenseeCreate
    categories: List[LicenseeCategory] = []


class RegistrationCheckResponse(ClubModel):
    age: int
    is_minor: bool
    suggested_category_id: Optional[str] = None
    category_matches_suggestion: bool = False


# =============================================
# Paiements
# =============================================

class FinalPriceRequest(ClubModel):
    """Calcul du montant dû"""
    pack_price: float = Field(..., ge=0)
    reductions: List[AppliedReduction] = []
    catalog: List[Reduction] = []
    payment_status: PaymentStatus = PaymentStatus.PENDING
    amount_paid: Optional[float] = Field(None, ge=0)


class FinalPriceResponse(ClubModel):
    final_price: float
    remaining_amount: float
    effects: Dict[str, str] = {}  # id de réduction → effet affiché


class PaymentUpdateRequest(ClubModel):
    """Mise à jour des informations de paiement"""
    licensee: Licensee
    update: PaymentUpdate
    packs: List[Pack] = []
    catalog: List[Reduction] = []


class PaymentUpdateResponse(ClubModel):
    licensee: Licensee
    previous_status: PaymentStatus
    confirmation_due: bool
    final_price: Optional[float] = None


# =============================================
# Stock et équipements
# =============================================

class StockQuery(ClubModel):
    """Stock d'un équipement/taille"""
    equipment_name: str
    size_name: str
    stock: List[StockEntry] = []
    licensees: List[Licensee] = []


class StockInfoResponse(ClubModel):
    equipment_name: str
    size_name: str
    managed: int
    assigned: int
    available: int
    level: str


class AssignmentRequest(ClubModel):
    """Attribution des équipements d'un licencié"""
    licensee: Licensee
    selections: List[AssignedEquipment]
    stock: List[StockEntry] = []
    licensees: List[Licensee] = []
    force: bool = False


class AssignmentResponse(ClubModel):
    licensee_id: str
    assigned_equipment: List[AssignedEquipment]
    equipment_status: EquipmentStatus


# =============================================
# Catalogue
# =============================================

class EquipmentRenameRequest(ClubModel):
    """Renommage d'un équipement"""
    packs: List[Pack]
    old_name: str = Field(..., min_length=1)
    new_name: str = Field(..., min_length=1)


# =============================================
# Mails
# =============================================

class ComposeEmailRequest(ClubModel):
    """Mail à composer depuis un modèle"""
    kind: EmailKind
    licensee: Licensee
    templates: EmailTemplates
    club: Optional[ClubInfo] = None
    context: Dict[str, str] = {}


# =============================================
# Statut
# =============================================

class StatusResponse(ClubModel):
    status: str
    version: str
    reference_season: int
    today: date
