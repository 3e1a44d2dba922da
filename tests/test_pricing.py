"""
Price Calculator Tests - montant final, reste à payer, mise à jour de paiement
"""
import pytest
from datetime import date

from licensing.models import (
    AppliedReduction,
    PaymentMethod,
    PaymentStatus,
    PaymentUpdate,
    Reduction,
)
from licensing.pricing import (
    apply_payment_update,
    calculate_final_price,
    describe_reduction_effect,
    remaining_amount,
    resolve_reductions,
)


def applied(*ids):
    return [AppliedReduction(id=i) for i in ids]


class TestCalculateFinalPrice:
    """Prix final"""

    def test_no_reduction(self):
        """Sans réduction : prix du pack"""
        assert calculate_final_price(180, [], []) == 180

    def test_floor_at_zero(self):
        """Jamais négatif"""
        catalog = [Reduction(id="r1", name="Bon", amount=80, multiplier=1)]
        assert calculate_final_price(50, applied("r1"), catalog) == 0

    def test_multiplier_then_fixed(self):
        """100 x 0.5 - 10 = 40"""
        catalog = [
            Reduction(id="m", name="Moitié", amount=0, multiplier=0.5),
            Reduction(id="f", name="Fixe", amount=10, multiplier=1),
        ]
        assert calculate_final_price(100, applied("m", "f"), catalog) == pytest.approx(40)

    def test_fixed_subtracted_after_all_multipliers(self):
        """Les montants fixes ne sont pas multipliés"""
        catalog = [
            Reduction(id="f", name="Fixe", amount=10),
            Reduction(id="m", name="Moitié", multiplier=0.5),
        ]
        assert calculate_final_price(100, applied("f", "m"), catalog) == pytest.approx(40)

    def test_multipliers_compound(self):
        """Multiplicateurs cumulés"""
        catalog = [
            Reduction(id="a", name="A", multiplier=0.5),
            Reduction(id="b", name="B", multiplier=0.8),
        ]
        assert calculate_final_price(200, applied("a", "b"), catalog) == pytest.approx(80)

    def test_dangling_reduction_ignored(self, reduction_catalog):
        """Réduction supprimée des paramètres : sans effet"""
        with_dangling = calculate_final_price(180, applied("red-pass", "red-supprimee"), reduction_catalog)
        without = calculate_final_price(180, applied("red-pass"), reduction_catalog)
        assert with_dangling == without == 130

    def test_zero_multiplier_has_no_effect(self):
        """Multiplicateur 0 : prix inchangé"""
        catalog = [Reduction(id="z", name="Zéro", multiplier=0)]
        assert calculate_final_price(120, applied("z"), catalog) == 120

    def test_catalog_fixture(self, reduction_catalog):
        """Fratrie + Pass'Sport + mairie sur un pack à 180"""
        price = calculate_final_price(
            180, applied("red-fratrie", "red-pass", "red-mairie"), reduction_catalog
        )
        assert price == pytest.approx(30)

    def test_resolve_keeps_applied_order(self, reduction_catalog):
        """Ordre de la liste appliquée"""
        resolved = resolve_reductions(applied("red-mairie", "inconnue", "red-fratrie"), reduction_catalog)
        assert [r.id for r in resolved] == ["red-mairie", "red-fratrie"]


class TestRemainingAmount:
    """Reste à payer"""

    def test_pending(self):
        """En attente : tout reste dû"""
        assert remaining_amount(130, PaymentStatus.PENDING) == 130

    def test_paid(self):
        """Payé : rien"""
        assert remaining_amount(130, PaymentStatus.PAID, 20) == 0

    def test_partial(self):
        """Partiel : différence"""
        assert remaining_amount(130, PaymentStatus.PARTIAL, 50) == 80

    def test_partial_overpaid(self):
        """Trop-perçu : 0"""
        assert remaining_amount(130, PaymentStatus.PARTIAL, 150) == 0

    def test_partial_without_amount(self):
        """Partiel sans montant"""
        assert remaining_amount(130, PaymentStatus.PARTIAL) == 130


class TestDescribeReductionEffect:
    """Effet affiché"""

    def test_multiplier(self):
        assert describe_reduction_effect(Reduction(id="m", name="M", multiplier=0.5)) == "(x0.5)"

    def test_amount(self):
        assert describe_reduction_effect(Reduction(id="f", name="F", amount=50, multiplier=1)) == "(-50€)"

    def test_nothing(self):
        assert describe_reduction_effect(Reduction(id="n", name="N")) == ""


class TestApplyPaymentUpdate:
    """Mise à jour du paiement"""

    def test_becomes_paid(self, make_licensee):
        """Passage à Payé : confirmation à envoyer"""
        licensee = make_licensee()
        update = PaymentUpdate(
            payment_status=PaymentStatus.PAID,
            payment_method=PaymentMethod.CHEQUE,
            payment_date=date(2025, 9, 10),
        )

        result = apply_payment_update(licensee, update)

        assert result.confirmation_due
        assert result.previous_status == PaymentStatus.PENDING
        assert result.licensee.payment_status == PaymentStatus.PAID
        assert result.licensee.payment_method == PaymentMethod.CHEQUE
        assert result.licensee.payment_date == date(2025, 9, 10)
        # le licencié d'origine n'est pas modifié
        assert licensee.payment_status == PaymentStatus.PENDING

    def test_already_paid(self, make_licensee):
        """Déjà payé : pas de nouvelle confirmation"""
        licensee = make_licensee(payment_status=PaymentStatus.PAID)
        update = PaymentUpdate(payment_status=PaymentStatus.PAID, payment_comment="Reçu remis")

        result = apply_payment_update(licensee, update)

        assert not result.confirmation_due
        assert result.licensee.payment_comment == "Reçu remis"

    def test_partial_keeps_amount(self, make_licensee):
        """Partiel : montant payé conservé"""
        result = apply_payment_update(
            make_licensee(),
            PaymentUpdate(payment_status=PaymentStatus.PARTIAL, amount_paid=60),
        )
        assert result.licensee.amount_paid == 60
        assert not result.confirmation_due

    def test_amount_cleared_when_not_partial(self, make_licensee):
        """Hors paiement partiel : montant payé effacé"""
        licensee = make_licensee(payment_status=PaymentStatus.PARTIAL, amount_paid=60)

        result = apply_payment_update(licensee, PaymentUpdate(payment_status=PaymentStatus.PAID))

        assert result.licensee.amount_paid is None
        assert result.confirmation_due

    def test_reductions_stay_models(self, make_licensee):
        """Les réductions restent des AppliedReduction"""
        update = PaymentUpdate(reductions=[AppliedReduction(id="red-pass", note="Bon n°42")])

        result = apply_payment_update(make_licensee(), update)

        assert isinstance(result.licensee.reductions[0], AppliedReduction)
        assert result.licensee.reductions[0].note == "Bon n°42"
        assert result.licensee.payment_status == PaymentStatus.PENDING

    def test_missing_fields_untouched(self, make_licensee):
        """Champs non fournis : inchangés"""
        licensee = make_licensee(payment_comment="Chèque à encaisser en octobre")

        result = apply_payment_update(licensee, PaymentUpdate(payment_method=PaymentMethod.CASH))

        assert result.licensee.payment_comment == "Chèque à encaisser en octobre"
        assert result.licensee.payment_method == PaymentMethod.CASH
