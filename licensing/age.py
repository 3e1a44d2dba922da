"""
Âge et minorité

La date de référence est toujours passée explicitement (date d'inscription)
pour qu'un même dossier donne le même résultat du chargement du formulaire
jusqu'à l'enregistrement.
"""
from datetime import date
from typing import Optional

MAJORITY_AGE = 18


def get_age(birth_date: Optional[date], as_of: date) -> Optional[int]:
    """
    Âge révolu à une date donnée

    Args:
        birth_date: date de naissance
        as_of: date de référence

    Returns:
        âge en années, None sans date de naissance
    """
    if not birth_date:
        return None

    age = as_of.year - birth_date.year

    # anniversaire pas encore passé
    if (as_of.month, as_of.day) < (birth_date.month, birth_date.day):
        age -= 1

    return age


def is_minor(birth_date: Optional[date], as_of: date, majority_age: int = MAJORITY_AGE) -> bool:
    """
    Mineur (moins de 18 ans) à la date donnée

    Returns:
        True si mineur, False sans date de naissance
    """
    age = get_age(birth_date, as_of)
    if age is None:
        return False
    return age < majority_age
