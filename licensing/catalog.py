"""
Catalogue : répercussion des renommages

Les packs référencent les équipements par nom, et les équipements leur
catégorie par nom. Tout renommage ou suppression passe par ces fonctions.
"""
from typing import List, Sequence

from loguru import logger

from .models import EquipmentCategory, EquipmentItem, Pack, Size


def rename_equipment(packs: Sequence[Pack], old_name: str, new_name: str) -> List[Pack]:
    """Renomme un équipement dans la composition de tous les packs"""
    if old_name == new_name:
        return list(packs)

    updated = []
    touched = 0
    for pack in packs:
        if old_name in pack.composition:
            composition = [new_name if item == old_name else item for item in pack.composition]
            pack = pack.model_copy(update={"composition": composition})
            touched += 1
        updated.append(pack)

    logger.info(f"Équipement renommé '{old_name}' → '{new_name}' ({touched} pack(s))")
    return updated


def remove_equipment(packs: Sequence[Pack], name: str) -> List[Pack]:
    """Retire un équipement supprimé de la composition des packs"""
    return [
        pack.model_copy(update={"composition": [item for item in pack.composition if item != name]})
        if name in pack.composition else pack
        for pack in packs
    ]


def rename_equipment_category(
    items: Sequence[EquipmentItem],
    old_name: str,
    new_name: str
) -> List[EquipmentItem]:
    """Renomme une catégorie d'équipement sur tous les équipements"""
    if old_name == new_name:
        return list(items)

    return [
        item.model_copy(update={"category": new_name}) if item.category == old_name else item
        for item in items
    ]


def sizes_for_equipment(
    item_name: str,
    items: Sequence[EquipmentItem],
    categories: Sequence[EquipmentCategory]
) -> List[Size]:
    """Tailles proposées pour un équipement (celles de sa catégorie)"""
    item = next((i for i in items if i.name == item_name), None)
    if item is None:
        return []

    category = next((c for c in categories if c.name == item.category), None)
    return list(category.sizes) if category else []
