"""
Modèles de données du club

Modèles Pydantic des fichiers JSON du club (licenciés, packs, réductions,
stock, catégories). Les champs sont en snake_case côté Python et acceptent
les clés camelCase des fichiers JSON existants.
"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .age import is_minor


def _date_part(value):
    """Les dates JSON sont des ISO datetime (toISOString) : on garde la date"""
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    if isinstance(value, datetime):
        return value.date()
    return value


IsoDate = Annotated[date, BeforeValidator(_date_part)]


class ClubModel(BaseModel):
    """Base commune : alias camelCase, noms Python acceptés en entrée"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================
# Enums
# =============================================

class Sex(str, Enum):
    """Sexe du licencié"""
    MALE = "male"
    FEMALE = "female"


class PaymentStatus(str, Enum):
    """Statut de paiement"""
    PENDING = "En attente"
    PAID = "Payé"
    PARTIAL = "Partiel"


class PaymentMethod(str, Enum):
    """Moyen de paiement"""
    CASH = "Espèces"
    CHEQUE = "Chèque"
    CARD = "CB"
    TRANSFER = "Virement"


class EquipmentStatus(str, Enum):
    """Statut d'attribution de l'équipement"""
    PENDING = "En attente"
    ASSIGNED = "Attribué"
    INCOMPLETE = "Incomplet"


class EmailStatus(str, Enum):
    """Statut d'un mail de la boîte d'envoi"""
    PENDING = "pending"
    SENT = "sent"


class EmailKind(str, Enum):
    """Modèles de mails"""
    PAYMENT_CONFIRMATION = "paymentConfirmation"
    EQUIPMENT_COMPLETE = "equipmentComplete"
    EQUIPMENT_INCOMPLETE = "equipmentIncomplete"


# =============================================
# Catalogue
# =============================================

class LicenseeCategory(ClubModel):
    """Catégorie de licencié (U10-U11 G, SENIORS F, Loisirs...)"""
    id: str
    name: str
    description: str = ""
    color: str = "#ffffff"


class Pack(ClubModel):
    """Pack d'équipements vendu à prix fixe"""
    id: str
    name: str
    price: float = Field(..., ge=0)
    composition: List[str] = []  # noms d'équipements, pas des ids


class Size(ClubModel):
    """Taille"""
    id: str
    name: str


class EquipmentCategory(ClubModel):
    """Catégorie d'équipement et ses tailles"""
    id: str
    name: str
    sizes: List[Size] = []


class EquipmentItem(ClubModel):
    """Équipement"""
    id: str
    name: str
    category: str  # nom de la catégorie d'équipement
    reference_adulte: Optional[str] = Field(None, alias="reference_adulte")
    reference_enfant: Optional[str] = Field(None, alias="reference_enfant")


class Reduction(ClubModel):
    """Réduction : montant fixe et/ou multiplicateur"""
    id: str
    name: str
    amount: float = 0
    note: Optional[str] = None
    multiplier: Optional[float] = None


class AppliedReduction(ClubModel):
    """Réduction appliquée à une inscription"""
    id: str  # id de la Reduction dans les paramètres
    note: Optional[str] = None  # note propre à cette application (n° de bon...)


# =============================================
# Licenciés
# =============================================

class LegalRepresentative(ClubModel):
    """Responsable légal d'un licencié mineur"""
    last_name: str
    first_name: str
    date_of_birth: IsoDate
    place_of_birth: str = ""
    born_abroad: bool = False
    email: str
    father_phone: Optional[str] = None
    mother_phone: Optional[str] = None


class AssignedEquipment(ClubModel):
    """Équipement attribué"""
    name: str
    size: str
    out_of_stock: Optional[bool] = None  # attribué en rupture (forcé)


class Licensee(ClubModel):
    """Inscription d'un licencié pour la saison"""
    id: str
    last_name: str
    first_name: str
    sex: Sex
    date_of_birth: IsoDate
    place_of_birth: str = ""
    born_abroad: bool = False
    licensee_category_id: str = ""
    pack_id: str = ""
    phone: str = ""
    email: str = ""
    registration_date: IsoDate

    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[IsoDate] = None
    amount_paid: Optional[float] = None
    payment_comment: Optional[str] = None
    reductions: List[AppliedReduction] = []

    equipment_status: EquipmentStatus = EquipmentStatus.PENDING
    assigned_equipment: List[AssignedEquipment] = []

    legal_representative: Optional[LegalRepresentative] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class LegalRepresentativeInput(ClubModel):
    """Responsable légal saisi dans le formulaire (champs tous optionnels)"""
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    date_of_birth: Optional[IsoDate] = None
    place_of_birth: Optional[str] = None
    born_abroad: bool = False
    email: Optional[EmailStr] = None
    father_phone: Optional[str] = None
    mother_phone: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        # le formulaire envoie des chaînes vides pour les champs non remplis
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LicenseeCreate(ClubModel):
    """
    Nouvelle inscription

    L'âge est évalué à la date d'inscription : un licencié mineur à cette
    date doit avoir un responsable légal complet.
    """
    last_name: str = Field(..., min_length=2)
    first_name: str = Field(..., min_length=2)
    sex: Sex
    date_of_birth: IsoDate
    place_of_birth: str = ""
    born_abroad: bool = False
    licensee_category_id: str
    pack_id: str
    phone: str = Field(..., min_length=10)
    email: EmailStr
    registration_date: IsoDate = Field(default_factory=date.today)
    legal_representative: Optional[LegalRepresentativeInput] = None

    @model_validator(mode="after")
    def check_legal_representative(self):
        if self.date_of_birth > self.registration_date:
            raise ValueError("La date de naissance doit précéder la date d'inscription")

        if not is_minor(self.date_of_birth, self.registration_date):
            return self

        rep = self.legal_representative or LegalRepresentativeInput()
        problems = []
        if not rep.last_name or len(rep.last_name) < 2:
            problems.append("Le nom du responsable doit contenir au moins 2 caractères.")
        if not rep.first_name or len(rep.first_name) < 2:
            problems.append("Le prénom du responsable doit contenir au moins 2 caractères.")
        if not rep.email:
            problems.append("L'adresse e-mail du responsable n'est pas valide.")
        if not rep.date_of_birth:
            problems.append("La date de naissance du responsable est requise.")
        if not rep.place_of_birth or len(rep.place_of_birth) < 2:
            problems.append("Le lieu de naissance du responsable est requis.")
        if not rep.father_phone and not rep.mother_phone:
            problems.append("Au moins un numéro de téléphone de parent est requis.")

        if problems:
            raise ValueError(" ".join(problems))
        return self

    def to_licensee(self, licensee_id: str) -> Licensee:
        """Inscription enregistrée : paiement et équipement en attente"""
        rep = self.legal_representative
        representative = None
        if rep and rep.last_name:
            representative = LegalRepresentative(
                last_name=rep.last_name,
                first_name=rep.first_name or "",
                date_of_birth=rep.date_of_birth,
                place_of_birth=rep.place_of_birth or "",
                born_abroad=rep.born_abroad,
                email=rep.email or "",
                father_phone=rep.father_phone,
                mother_phone=rep.mother_phone,
            )

        return Licensee(
            id=licensee_id,
            last_name=self.last_name,
            first_name=self.first_name,
            sex=self.sex,
            date_of_birth=self.date_of_birth,
            place_of_birth=self.place_of_birth,
            born_abroad=self.born_abroad,
            licensee_category_id=self.licensee_category_id,
            pack_id=self.pack_id,
            phone=self.phone,
            email=self.email,
            registration_date=self.registration_date,
            legal_representative=representative,
        )


class PaymentUpdate(ClubModel):
    """Mise à jour des informations de paiement (champs fournis seulement)"""
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[IsoDate] = None
    payment_comment: Optional[str] = None
    reductions: Optional[List[AppliedReduction]] = None
    amount_paid: Optional[float] = Field(None, ge=0)


# =============================================
# Stock
# =============================================

class StockEntry(ClubModel):
    """Stock géré (saisi par l'administrateur) pour un équipement/taille"""
    equipment_name: str
    size_name: str
    quantity: int = 0
    last_modified: Optional[datetime] = None


# =============================================
# Paramètres et mails
# =============================================

class ClubInfo(ClubModel):
    """Informations du club"""
    name: str = "Trapel Football Club"
    address: str = "Adresse à compléter"
    email: Optional[str] = None
    phone: Optional[str] = None
    responsible_name: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None


class EmailTemplate(ClubModel):
    """Modèle de mail ({{variable}})"""
    subject: str = ""
    body: str = ""


class EmailTemplates(ClubModel):
    """Modèles de mails du club"""
    payment_confirmation: EmailTemplate = EmailTemplate()
    equipment_complete: EmailTemplate = EmailTemplate()
    equipment_incomplete: EmailTemplate = EmailTemplate()

    def get(self, kind: EmailKind) -> EmailTemplate:
        return {
            EmailKind.PAYMENT_CONFIRMATION: self.payment_confirmation,
            EmailKind.EQUIPMENT_COMPLETE: self.equipment_complete,
            EmailKind.EQUIPMENT_INCOMPLETE: self.equipment_incomplete,
        }[kind]


class PendingEmail(ClubModel):
    """Mail en attente d'envoi"""
    id: str
    licensee_id: str
    recipient_name: str
    recipient_email: str
    subject: str
    body: str
    status: EmailStatus = EmailStatus.PENDING
    created_at: datetime
    sent_at: Optional[datetime] = None
