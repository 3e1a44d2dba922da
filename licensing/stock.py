"""
Stock et attribution des équipements

Le stock enregistré est le stock géré (commandé/compté). Le stock disponible
n'est jamais stocké : il est recalculé à chaque appel à partir de toutes les
attributions des licenciés.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .models import (
    AssignedEquipment,
    EquipmentStatus,
    Licensee,
    Pack,
    StockEntry,
)


# Seuils d'alerte du stock disponible
STOCK_CRITICAL_THRESHOLD = 5
STOCK_LOW_THRESHOLD = 10


class OutOfStockError(ValueError):
    """Attribution non forcée d'une taille en rupture"""

    def __init__(self, items: List[AssignedEquipment]):
        self.items = items
        labels = ", ".join(f"{item.name} ({item.size})" for item in items)
        super().__init__(f"Taille(s) en rupture de stock: {labels}")


@dataclass
class StockInfo:
    """État du stock pour un équipement/taille"""
    managed: int
    assigned: int
    available: int
    last_modified: Optional[datetime] = None


@dataclass
class AssignmentOutcome:
    """Résultat d'une attribution d'équipement"""
    assigned_equipment: List[AssignedEquipment] = field(default_factory=list)
    equipment_status: EquipmentStatus = EquipmentStatus.PENDING


def find_stock_entry(
    stock: Sequence[StockEntry],
    equipment_name: str,
    size_name: str
) -> Optional[StockEntry]:
    for entry in stock:
        if entry.equipment_name == equipment_name and entry.size_name == size_name:
            return entry
    return None


def count_assigned(
    equipment_name: str,
    size_name: str,
    licensees: Sequence[Licensee],
    exclude_licensee_id: Optional[str] = None
) -> int:
    """Nombre de licenciés ayant reçu cet équipement/taille en stock"""
    count = 0
    for licensee in licensees:
        if exclude_licensee_id is not None and licensee.id == exclude_licensee_id:
            continue
        if any(
            item.name == equipment_name and item.size == size_name and not item.out_of_stock
            for item in licensee.assigned_equipment
        ):
            count += 1
    return count


def stock_info(
    equipment_name: str,
    size_name: str,
    stock: Sequence[StockEntry],
    licensees: Sequence[Licensee],
    exclude_licensee_id: Optional[str] = None
) -> StockInfo:
    """Stock géré, attribué et disponible d'un équipement/taille"""
    entry = find_stock_entry(stock, equipment_name, size_name)
    managed = entry.quantity if entry else 0
    assigned = count_assigned(equipment_name, size_name, licensees, exclude_licensee_id)

    return StockInfo(
        managed=managed,
        assigned=assigned,
        available=managed - assigned,
        last_modified=entry.last_modified if entry else None,
    )


def available_stock(
    equipment_name: str,
    size_name: str,
    stock: Sequence[StockEntry],
    licensees: Sequence[Licensee]
) -> int:
    """
    Stock disponible = stock géré - attributions en stock

    Les attributions forcées en rupture ne sont pas décomptées. Le résultat
    peut être négatif (sur-attribution) : ce n'est pas une erreur.
    """
    return stock_info(equipment_name, size_name, stock, licensees).available


def stock_level(
    available: int,
    critical: int = STOCK_CRITICAL_THRESHOLD,
    low: int = STOCK_LOW_THRESHOLD
) -> str:
    """Niveau d'alerte : critical, low ou ok"""
    if available <= critical:
        return "critical"
    if available <= low:
        return "low"
    return "ok"


def latest_stock_update(stock: Sequence[StockEntry]) -> Optional[datetime]:
    """Date de la dernière modification du stock"""
    dates = [entry.last_modified for entry in stock if entry.last_modified]
    return max(dates) if dates else None


def set_managed_quantity(
    stock: Sequence[StockEntry],
    equipment_name: str,
    size_name: str,
    quantity: int,
    now: datetime
) -> List[StockEntry]:
    """
    Nouveau stock géré pour un équipement/taille

    La quantité est ramenée à 0 si négative. L'entrée est créée si besoin.
    """
    new_quantity = max(0, quantity)
    updated = []
    found = False

    for entry in stock:
        if entry.equipment_name == equipment_name and entry.size_name == size_name:
            entry = entry.model_copy(update={"quantity": new_quantity, "last_modified": now})
            found = True
        updated.append(entry)

    if not found:
        updated.append(StockEntry(
            equipment_name=equipment_name,
            size_name=size_name,
            quantity=new_quantity,
            last_modified=now,
        ))

    logger.debug(f"Stock {equipment_name} ({size_name}) = {new_quantity}")
    return updated


def is_size_in_stock(
    equipment_name: str,
    size_name: str,
    stock: Sequence[StockEntry],
    licensees: Sequence[Licensee],
    exclude_licensee_id: Optional[str] = None
) -> bool:
    """
    Taille disponible pour une attribution

    exclude_licensee_id : licencié en cours de réattribution, dont les
    attributions actuelles ne doivent pas bloquer sa propre sélection.
    """
    info = stock_info(equipment_name, size_name, stock, licensees, exclude_licensee_id)
    return info.available > 0


def equipment_status_for(assignments: Sequence[AssignedEquipment]) -> EquipmentStatus:
    """Incomplet dès qu'un équipement est attribué en rupture"""
    if any(item.out_of_stock for item in assignments):
        return EquipmentStatus.INCOMPLETE
    return EquipmentStatus.ASSIGNED


def initial_selections(licensee: Licensee, pack: Optional[Pack]) -> List[AssignedEquipment]:
    """
    Sélection de départ du formulaire d'attribution

    Un licencié Incomplet repart de ses attributions précédentes, les
    autres d'une ligne sans taille par équipement du pack.
    """
    if pack is None:
        return []

    if licensee.equipment_status == EquipmentStatus.INCOMPLETE and licensee.assigned_equipment:
        return [AssignedEquipment(name=item.name, size=item.size) for item in licensee.assigned_equipment]

    return [AssignedEquipment(name=name, size="") for name in pack.composition]


def assign_equipment(
    licensee: Licensee,
    selections: Sequence[AssignedEquipment],
    stock: Sequence[StockEntry],
    licensees: Sequence[Licensee],
    force: bool = False
) -> AssignmentOutcome:
    """
    Attribution des équipements sélectionnés

    Chaque sélection est marquée en rupture si sa taille n'est pas en stock
    (hors attributions actuelles du licencié, en comptant les sélections
    précédentes de la même demande). Sans forçage, une rupture refuse
    l'attribution.

    Raises:
        ValueError: une sélection sans taille
        OutOfStockError: rupture sans forçage
    """
    if not selections or any(not item.size for item in selections):
        raise ValueError("Veuillez sélectionner une taille pour chaque équipement.")

    # unités déjà prises par les sélections précédentes de la même demande
    taken: Dict[Tuple[str, str], int] = {}
    assignments = []
    for item in selections:
        key = (item.name, item.size)
        info = stock_info(item.name, item.size, stock, licensees, exclude_licensee_id=licensee.id)
        in_stock = info.available - taken.get(key, 0) > 0
        if in_stock:
            taken[key] = taken.get(key, 0) + 1
        assignments.append(AssignedEquipment(name=item.name, size=item.size, out_of_stock=not in_stock))

    missing = [item for item in assignments if item.out_of_stock]
    if missing and not force:
        raise OutOfStockError(missing)
    if missing:
        logger.warning(
            f"Attribution forcée en rupture pour {licensee.full_name}: "
            f"{', '.join(f'{m.name} ({m.size})' for m in missing)}"
        )

    status = equipment_status_for(assignments)
    logger.info(f"Équipement {status.value} pour {licensee.full_name} ({licensee.id})")

    return AssignmentOutcome(assigned_equipment=assignments, equipment_status=status)
