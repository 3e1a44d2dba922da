"""
Club Router

API des inscriptions du club
- Catégories de licenciés (proposition, descriptions de saison)
- Contrôle des inscriptions (mineurs, responsable légal)
- Montants dus et paiements
- Stock disponible et attribution des équipements
- Catalogue et mails
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from licensing import (
    OutOfStockError,
    apply_payment_update,
    assign_equipment,
    calculate_final_price,
    compose_email,
    describe_reduction_effect,
    get_age,
    is_minor,
    match_category,
    refresh_descriptions,
    remaining_amount,
    rename_equipment,
    stock_info,
    stock_level,
)
from licensing.models import Pack, PendingEmail

from .config import ClubSettings
from .dependencies import get_reference_season, get_settings
from .models import (
    AssignmentRequest,
    AssignmentResponse,
    CategoryDescriptionsRequest,
    CategoryDescriptionsResponse,
    CategoryMatchRequest,
    CategoryMatchResponse,
    ComposeEmailRequest,
    EquipmentRenameRequest,
    FinalPriceRequest,
    FinalPriceResponse,
    PaymentUpdateRequest,
    PaymentUpdateResponse,
    RegistrationCheckRequest,
    RegistrationCheckResponse,
    StockInfoResponse,
    StockQuery,
)

router = APIRouter(prefix="/club", tags=["Club Registration"])


# =============================================
# Catégories de licenciés
# =============================================

@router.post("/categories/match", response_model=CategoryMatchResponse)
async def match_licensee_category(
    body: CategoryMatchRequest,
    season: int = Depends(get_reference_season)
):
    """
    Catégorie proposée pour une date de naissance et un sexe

    Les descriptions sont recalculées pour la saison avant la recherche.
    Sans correspondance, la catégorie doit être choisie manuellement.
    """
    categories = refresh_descriptions(body.categories, season)
    category_id = match_category(body.birth_date, body.sex, categories)

    return CategoryMatchResponse(
        category_id=category_id,
        requires_manual_selection=category_id is None
    )


@router.post("/categories/descriptions", response_model=CategoryDescriptionsResponse)
async def category_descriptions(
    body: CategoryDescriptionsRequest,
    season: int = Depends(get_reference_season)
):
    """Descriptions des catégories pour la saison de référence"""
    return CategoryDescriptionsResponse(
        reference_season=season,
        categories=refresh_descriptions(body.categories, season)
    )


# =============================================
# Inscriptions
# =============================================

@router.post("/registrations/check", response_model=RegistrationCheckResponse)
async def check_registration(
    body: RegistrationCheckRequest,
    season: int = Depends(get_reference_season)
):
    """
    Contrôle d'une nouvelle inscription

    La validation (responsable légal des mineurs) est faite à la date
    d'inscription. Retourne l'âge et la catégorie proposée.
    """
    registration = body.registration
    categories = refresh_descriptions(body.categories, season)
    suggested = match_category(registration.date_of_birth, registration.sex, categories)

    return RegistrationCheckResponse(
        age=get_age(registration.date_of_birth, registration.registration_date),
        is_minor=is_minor(registration.date_of_birth, registration.registration_date),
        suggested_category_id=suggested,
        category_matches_suggestion=suggested is not None
        and suggested == registration.licensee_category_id
    )


# =============================================
# Paiements
# =============================================

@router.post("/pricing/final-price", response_model=FinalPriceResponse)
async def final_price(body: FinalPriceRequest):
    """Montant dû après réductions et reste à payer"""
    price = calculate_final_price(body.pack_price, body.reductions, body.catalog)
    applied_ids = {item.id for item in body.reductions}

    return FinalPriceResponse(
        final_price=price,
        remaining_amount=remaining_amount(price, body.payment_status, body.amount_paid),
        effects={
            reduction.id: describe_reduction_effect(reduction)
            for reduction in body.catalog
            if reduction.id in applied_ids
        }
    )


@router.post("/payments/update", response_model=PaymentUpdateResponse)
async def update_payment(body: PaymentUpdateRequest):
    """
    Mise à jour des informations de paiement

    confirmationDue indique qu'un mail de confirmation doit être envoyé
    (passage à "Payé").
    """
    transition = apply_payment_update(body.licensee, body.update)
    licensee = transition.licensee

    pack = next((p for p in body.packs if p.id == licensee.pack_id), None)
    price = None
    if pack is not None:
        price = calculate_final_price(pack.price, licensee.reductions, body.catalog)
    elif transition.confirmation_due:
        logger.warning(f"Pack {licensee.pack_id} introuvable : pas de montant pour la confirmation")

    return PaymentUpdateResponse(
        licensee=licensee,
        previous_status=transition.previous_status,
        confirmation_due=transition.confirmation_due,
        final_price=price
    )


# =============================================
# Stock et équipements
# =============================================

@router.post("/stock/available", response_model=StockInfoResponse)
async def stock_available(
    body: StockQuery,
    settings: ClubSettings = Depends(get_settings)
):
    """Stock géré, attribué et disponible d'un équipement/taille"""
    info = stock_info(body.equipment_name, body.size_name, body.stock, body.licensees)

    return StockInfoResponse(
        equipment_name=body.equipment_name,
        size_name=body.size_name,
        managed=info.managed,
        assigned=info.assigned,
        available=info.available,
        level=stock_level(
            info.available,
            settings.STOCK_CRITICAL_THRESHOLD,
            settings.STOCK_LOW_THRESHOLD
        )
    )


@router.post("/equipment/assign", response_model=AssignmentResponse)
async def assign_licensee_equipment(body: AssignmentRequest):
    """
    Attribution des équipements d'un licencié

    - taille obligatoire pour chaque équipement
    - taille en rupture refusée (409) sauf attribution forcée
    - attribution forcée : statut Incomplet
    """
    try:
        outcome = assign_equipment(
            body.licensee,
            body.selections,
            body.stock,
            body.licensees,
            force=body.force
        )
    except OutOfStockError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(e),
                "items": [item.model_dump(by_alias=True) for item in e.items]
            }
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AssignmentResponse(
        licensee_id=body.licensee.id,
        assigned_equipment=outcome.assigned_equipment,
        equipment_status=outcome.equipment_status
    )


# =============================================
# Catalogue
# =============================================

@router.post("/catalog/equipment/rename", response_model=List[Pack])
async def rename_catalog_equipment(body: EquipmentRenameRequest):
    """Renomme un équipement dans tous les packs qui le contiennent"""
    return rename_equipment(body.packs, body.old_name, body.new_name)


# =============================================
# Mails
# =============================================

@router.post("/mail/compose", response_model=PendingEmail)
async def compose_mail(
    body: ComposeEmailRequest,
    settings: ClubSettings = Depends(get_settings)
):
    """
    Compose un mail à partir d'un modèle

    Les informations du club viennent des paramètres si elles ne sont pas
    fournies.
    """
    club = body.club or settings.club_info()

    try:
        email = compose_email(body.kind, body.licensee, body.templates, club, body.context)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if email is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Modèle de mail '{body.kind.value}' absent ou incomplet"
        )
    return email
