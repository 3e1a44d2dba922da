"""
Composition des mails

Les modèles de mails utilisent des variables {{clubName}}, {{recipientName}}...
Le rendu est fait avec Jinja2 ; l'envoi (Mailjet) est hors de ce module.
"""
from datetime import datetime
from typing import Dict, Optional, Sequence

from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment
from loguru import logger

from .models import (
    AssignedEquipment,
    ClubInfo,
    EmailKind,
    EmailTemplates,
    EquipmentStatus,
    Licensee,
    Pack,
    PendingEmail,
    Reduction,
)
from .pricing import calculate_final_price

# modèles fournis par l'appelant : rendu en bac à sable
# variables inconnues rendues vides ; le HTML des modèles est conservé tel quel
_env = SandboxedEnvironment(autoescape=False, keep_trailing_newline=True)


def render_template(template: str, context: Dict[str, str]) -> str:
    """
    Remplace les variables {{nom}} d'un modèle

    Raises:
        ValueError: syntaxe invalide, erreur de rendu ou accès interdit
    """
    try:
        return _env.from_string(template).render(**context)
    except TemplateError as e:
        raise ValueError(f"Modèle de mail invalide: {e.message}") from e


def format_equipment_list_html(items: Sequence[AssignedEquipment]) -> str:
    """Liste HTML des équipements attribués, ruptures signalées en rouge"""
    lines = []
    for item in items:
        marker = ' <strong style="color: #dc2626;">- En rupture</strong>' if item.out_of_stock else ""
        lines.append(f"<li>{item.name} ({item.size}){marker}</li>")
    return "<ul>" + "".join(lines) + "</ul>"


def club_context(club: ClubInfo) -> Dict[str, str]:
    """Variables du club disponibles dans tous les modèles"""
    return {
        "clubName": club.name or "",
        "clubAddress": (club.address or "").replace("\n", "<br />"),
        "clubEmail": club.email or "",
        "clubPhone": club.phone or "",
        "clubResponsibleName": club.responsible_name or "",
        "clubFacebookUrl": club.facebook_url or "",
        "clubInstagramUrl": club.instagram_url or "",
    }


def compose_email(
    kind: EmailKind,
    licensee: Licensee,
    templates: EmailTemplates,
    club: ClubInfo,
    context: Optional[Dict[str, str]] = None,
    now: Optional[datetime] = None
) -> Optional[PendingEmail]:
    """
    Mail à placer dans la boîte d'envoi

    Le destinataire est le responsable légal s'il existe, sinon le licencié.

    Returns:
        mail en attente, None si le modèle est absent ou incomplet
    """
    template = templates.get(kind)
    if not template.subject or not template.body:
        logger.error(f"Modèle de mail '{kind.value}' absent ou incomplet")
        return None

    now = now or datetime.now()
    recipient = licensee.legal_representative or licensee
    recipient_name = f"{recipient.first_name} {recipient.last_name}"

    values = {
        "recipientName": recipient_name,
        "licenseeName": licensee.full_name,
        **club_context(club),
        **(context or {}),
    }

    return PendingEmail(
        id=f"email-{int(now.timestamp() * 1000)}",
        licensee_id=licensee.id,
        recipient_name=recipient_name,
        recipient_email=recipient.email,
        subject=render_template(template.subject, values),
        body=render_template(template.body, values),
        created_at=now,
    )


def payment_confirmation_email(
    licensee: Licensee,
    pack: Pack,
    catalog: Sequence[Reduction],
    templates: EmailTemplates,
    club: ClubInfo,
    now: Optional[datetime] = None
) -> Optional[PendingEmail]:
    """Mail de confirmation de paiement avec le montant final"""
    final_price = calculate_final_price(pack.price, licensee.reductions, catalog)
    return compose_email(
        EmailKind.PAYMENT_CONFIRMATION,
        licensee,
        templates,
        club,
        {"packName": pack.name, "finalPrice": f"{final_price:.2f}"},
        now,
    )


def equipment_email(
    licensee: Licensee,
    templates: EmailTemplates,
    club: ClubInfo,
    now: Optional[datetime] = None
) -> Optional[PendingEmail]:
    """Mail d'attribution : complet ou incomplet selon le statut d'équipement"""
    kind = (
        EmailKind.EQUIPMENT_COMPLETE
        if licensee.equipment_status == EquipmentStatus.ASSIGNED
        else EmailKind.EQUIPMENT_INCOMPLETE
    )
    return compose_email(
        kind,
        licensee,
        templates,
        club,
        {"equipmentList": format_equipment_list_html(licensee.assigned_equipment)},
        now,
    )
