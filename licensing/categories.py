"""
Catégories de licenciés

- Règle d'âge extraite du nom de la catégorie (U10-U11 G, U9 F, SENIORS G...)
- Description dérivée de la saison de référence ("Né en 2015 ou 2016")
- Catégorie proposée à partir de l'année de naissance et du sexe
"""
import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from loguru import logger

from .models import LicenseeCategory, Sex


# =====================================================
# Constantes
# =====================================================

# Les seniors sont nés avant ou en (saison - 19)
SENIORS_REFERENCE_AGE = 19

RULE_SENIORS = "seniors"
RULE_RANGE = "range"
RULE_SINGLE = "single"
RULE_CUSTOM = "custom"

RANGE_PATTERN = re.compile(r"^U(\d+)-U(\d+)")
SINGLE_PATTERN = re.compile(r"^U(\d+)")
YEAR_PATTERN = re.compile(r"\d{4}")

# mention des descriptions seniors, utilisée aussi pour la correspondance
SENIORS_MARKER = "avant ou en"


@dataclass(frozen=True)
class AgeRule:
    """Règle d'âge d'une catégorie"""
    type: str
    values: List[int] = field(default_factory=list)

    @property
    def is_custom(self) -> bool:
        return self.type == RULE_CUSTOM


def age_rule(name: str) -> AgeRule:
    """
    Règle d'âge déduite du nom de la catégorie

    SENIORS F   → seniors [19]
    U10-U11 G   → range [10, 11]
    U9 F        → single [9]
    Loisirs     → custom (description libre)
    """
    upper_name = name.strip().upper()

    if upper_name.startswith("LOISIRS") or (
        not SINGLE_PATTERN.match(upper_name) and not upper_name.startswith("SENIORS")
    ):
        return AgeRule(RULE_CUSTOM)

    if upper_name.startswith("SENIORS"):
        return AgeRule(RULE_SENIORS, [SENIORS_REFERENCE_AGE])

    range_match = RANGE_PATTERN.match(upper_name)
    if range_match:
        return AgeRule(RULE_RANGE, [int(range_match.group(1)), int(range_match.group(2))])

    single_match = SINGLE_PATTERN.match(upper_name)
    return AgeRule(RULE_SINGLE, [int(single_match.group(1))])


def birth_verb(name: str) -> str:
    """'Née' pour les catégories féminines, 'Né' sinon"""
    return "Née" if " F" in name.strip().upper() else "Né"


def derive_description(category: LicenseeCategory, reference_season: int) -> str:
    """
    Description d'une catégorie pour une saison de référence

    Ne dépend que du nom et de la saison : la description précédente n'est
    conservée que pour les catégories libres (Loisirs...).

    Les catégories à âge unique suivent volontairement la même convention
    que les tranches : UN correspond à l'année (saison - N), U9 en 2026 étant
    né en 2017 comme le U10 de U10-U11 est né en 2016.

    Args:
        category: catégorie de licencié
        reference_season: année de fin de saison (2026 pour 2025-2026)

    Returns:
        description, ex. "Né en 2015 ou 2016"
    """
    rule = age_rule(category.name)
    if rule.is_custom:
        return category.description

    verb = birth_verb(category.name)

    if rule.type == RULE_SENIORS:
        year = reference_season - rule.values[0]
        return f"{verb} {SENIORS_MARKER} {year}"

    # UN : l'année civile de fin de saison moins N (U11 en 2025-2026 : né en 2015)
    if rule.type == RULE_RANGE:
        year1 = reference_season - max(rule.values)
        year2 = reference_season - min(rule.values)
        return f"{verb} en {year1} ou {year2}"

    return f"{verb} en {reference_season - rule.values[0]}"


def refresh_descriptions(
    categories: Sequence[LicenseeCategory],
    reference_season: int
) -> List[LicenseeCategory]:
    """Catalogue avec descriptions recalculées (l'entrée n'est pas modifiée)"""
    return [
        category.model_copy(update={"description": derive_description(category, reference_season)})
        for category in categories
    ]


def _matches_year(description: str, birth_year: int) -> bool:
    years = [int(y) for y in YEAR_PATTERN.findall(description)]
    if not years:
        return False

    if SENIORS_MARKER in description:
        return birth_year <= years[0]
    if len(years) == 2:
        return birth_year in years
    if len(years) == 1:
        return birth_year == years[0]
    return False


def match_category(
    birth_date: date,
    sex: Sex,
    categories: Sequence[LicenseeCategory]
) -> Optional[str]:
    """
    Catégorie correspondant à l'année de naissance et au sexe

    Les catégories sont parcourues dans l'ordre du catalogue, la première
    qui correspond l'emporte. On compare l'année de naissance (et non l'âge)
    aux années de la description.

    Returns:
        id de la catégorie, None si aucune ne correspond (choix manuel)
    """
    birth_year = birth_date.year
    suffix = "G" if Sex(sex) == Sex.MALE else "F"

    for category in categories:
        upper_name = category.name.strip().upper()

        if not upper_name.endswith(f" {suffix}") and not upper_name.startswith(f"SENIORS {suffix}"):
            continue

        if _matches_year(category.description, birth_year):
            return category.id

    logger.debug(f"Aucune catégorie pour {birth_year} ({suffix}) : sélection manuelle")
    return None
