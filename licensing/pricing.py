"""
Calcul des montants

Source unique du montant dû par un licencié : tableau des paiements,
fiches, exports et mail de confirmation passent tous par
calculate_final_price.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from loguru import logger

from .models import (
    AppliedReduction,
    Licensee,
    PaymentStatus,
    PaymentUpdate,
    Reduction,
)


def resolve_reductions(
    applied: Sequence[AppliedReduction],
    catalog: Sequence[Reduction]
) -> List[Reduction]:
    """
    Réductions du catalogue correspondant aux réductions appliquées

    L'ordre de la liste appliquée est conservé. Une réduction supprimée des
    paramètres après application est ignorée.
    """
    by_id: Dict[str, Reduction] = {r.id: r for r in catalog}
    resolved = []
    for item in applied:
        reduction = by_id.get(item.id)
        if reduction is None:
            logger.debug(f"Réduction inconnue ignorée: {item.id}")
            continue
        resolved.append(reduction)
    return resolved


def calculate_final_price(
    pack_price: float,
    applied: Sequence[AppliedReduction],
    catalog: Sequence[Reduction]
) -> float:
    """
    Prix final d'un pack après réductions

    1. multiplicateurs appliqués dans l'ordre de la liste
    2. somme des montants fixes soustraite une seule fois
    3. jamais négatif

    Args:
        pack_price: prix du pack
        applied: réductions appliquées à l'inscription
        catalog: réductions définies dans les paramètres

    Returns:
        montant dû (>= 0)
    """
    reductions = resolve_reductions(applied, catalog)

    price = pack_price
    for reduction in reductions:
        # multiplicateur absent ou nul : sans effet
        if reduction.multiplier and reduction.multiplier != 1:
            price *= reduction.multiplier

    total_fixed = sum(reduction.amount or 0 for reduction in reductions)

    return max(0.0, price - total_fixed)


def remaining_amount(
    final_price: float,
    payment_status: PaymentStatus,
    amount_paid: Optional[float] = None
) -> float:
    """Reste à payer selon le statut de paiement"""
    if payment_status == PaymentStatus.PAID:
        remaining = 0.0
    elif payment_status == PaymentStatus.PARTIAL:
        remaining = final_price - (amount_paid or 0)
    else:
        remaining = final_price
    return max(0.0, remaining)


def describe_reduction_effect(reduction: Reduction) -> str:
    """Effet affiché d'une réduction : (x0.5), (-10€) ou rien"""
    if reduction.multiplier and reduction.multiplier != 1:
        return f"(x{reduction.multiplier:g})"
    if reduction.amount and reduction.amount > 0:
        return f"(-{reduction.amount:g}€)"
    return ""


@dataclass
class PaymentTransition:
    """Résultat d'une mise à jour de paiement"""
    licensee: Licensee
    previous_status: PaymentStatus
    confirmation_due: bool = False  # passage à "Payé" : mail de confirmation


def apply_payment_update(licensee: Licensee, update: PaymentUpdate) -> PaymentTransition:
    """
    Applique les informations de paiement fournies à une copie du licencié

    Le montant déjà payé n'est conservé que pour un paiement partiel.
    """
    # attributs et non model_dump() : les réductions restent des modèles
    changes = {
        name: getattr(update, name)
        for name in update.model_fields_set
        if getattr(update, name) is not None
    }
    updated = licensee.model_copy(update=changes)

    if updated.payment_status != PaymentStatus.PARTIAL:
        updated.amount_paid = None

    previous = licensee.payment_status
    confirmation_due = (
        updated.payment_status == PaymentStatus.PAID and previous != PaymentStatus.PAID
    )
    if confirmation_due:
        logger.info(f"Paiement complet pour {updated.full_name} ({updated.id})")

    return PaymentTransition(
        licensee=updated,
        previous_status=previous,
        confirmation_due=confirmation_due,
    )
