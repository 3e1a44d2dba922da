"""
Inscriptions du club

Calculs des inscriptions : catégories de licenciés, montants dus, stock
disponible et attribution des équipements
"""
from .age import MAJORITY_AGE, get_age, is_minor
from .categories import (
    AgeRule,
    age_rule,
    derive_description,
    match_category,
    refresh_descriptions,
)
from .pricing import (
    PaymentTransition,
    apply_payment_update,
    calculate_final_price,
    describe_reduction_effect,
    remaining_amount,
)
from .stock import (
    AssignmentOutcome,
    OutOfStockError,
    StockInfo,
    assign_equipment,
    available_stock,
    equipment_status_for,
    initial_selections,
    is_size_in_stock,
    latest_stock_update,
    set_managed_quantity,
    stock_info,
    stock_level,
)
from .catalog import (
    remove_equipment,
    rename_equipment,
    rename_equipment_category,
    sizes_for_equipment,
)
from .mailing import (
    compose_email,
    equipment_email,
    format_equipment_list_html,
    payment_confirmation_email,
    render_template,
)

__all__ = [
    "MAJORITY_AGE",
    "get_age",
    "is_minor",
    "AgeRule",
    "age_rule",
    "derive_description",
    "match_category",
    "refresh_descriptions",
    "PaymentTransition",
    "apply_payment_update",
    "calculate_final_price",
    "describe_reduction_effect",
    "remaining_amount",
    "AssignmentOutcome",
    "OutOfStockError",
    "StockInfo",
    "assign_equipment",
    "available_stock",
    "equipment_status_for",
    "initial_selections",
    "is_size_in_stock",
    "latest_stock_update",
    "set_managed_quantity",
    "stock_info",
    "stock_level",
    "remove_equipment",
    "rename_equipment",
    "rename_equipment_category",
    "sizes_for_equipment",
    "compose_email",
    "equipment_email",
    "format_equipment_list_html",
    "payment_confirmation_email",
    "render_template",
]
