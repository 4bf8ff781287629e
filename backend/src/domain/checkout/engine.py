"""CheckoutValidationEngine - runs the checkout rules and applies the decision table"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .basket import Basket
from .models import (
    GateConfig,
    ReasonCode,
    RuleEvaluation,
    RuleFailure,
    ValidationOutcome,
    ValidationStatus
)
from .port import Clock, InventoryEvaluatorPort, PromotionCatalogPort
from .rules import (
    check_basket_content,
    check_class_dates,
    check_coupons,
    check_po_box_restrictions,
    check_product_existence,
    check_quantity_limits,
    check_tax
)


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CheckoutValidationEngine:
    """Checkout gate for a basket.

    Every rule is evaluated before a decision is made so each rule's
    enable-checkout contribution is always collected. The outcome is then
    chosen by a fixed precedence table; the first matching row wins.
    """

    def __init__(
        self,
        config: GateConfig,
        inventory_evaluator: InventoryEvaluatorPort,
        promotions: PromotionCatalogPort,
        clock: Clock = utc_now
    ):
        self.config = config
        self.inventory_evaluator = inventory_evaluator
        self.promotions = promotions
        self.clock = clock

    def validate(self, basket: Optional[Basket], validate_tax: bool = False) -> ValidationOutcome:
        """Validate a basket for checkout.

        Args:
            basket: Basket to validate; None yields an ERROR outcome
            validate_tax: Whether the basket's total tax must be computed

        Returns:
            ValidationOutcome with status, optional reason and enable-checkout flag

        Raises:
            DataIntegrityError: If inventory or class data is missing or malformed
            InventoryLookupError: If the store inventory lookup fails
        """
        if basket is None:
            logger.info("Checkout validation without basket: ERROR")
            return ValidationOutcome(
                status=ValidationStatus.ERROR,
                enable_checkout=False,
                checked_at=self.clock().isoformat()
            )

        existence = check_product_existence(basket, self.config)
        inventory = self.inventory_evaluator.evaluate(basket, self.config)
        class_dates = check_class_dates(basket, self.config, self.clock)
        quantities = check_quantity_limits(basket, self.config, self.promotions)
        coupons = check_coupons(basket)
        content = check_basket_content(basket)
        tax = check_tax(basket) if validate_tax else None
        po_box = check_po_box_restrictions(basket) if basket.shipments else None

        evaluations = [
            evaluation for evaluation in (
                existence, inventory.evaluation, class_dates, quantities,
                coupons, content, tax, po_box
            )
            if evaluation is not None
        ]
        enable_checkout = all(evaluation.enable_checkout for evaluation in evaluations)

        for evaluation in evaluations:
            if not evaluation.passed:
                logger.debug(
                    f"Checkout rule '{evaluation.rule_name}' failed for basket {basket.id}",
                    extra={"basket_id": basket.id}
                )

        # Store inventory only passes when web availability holds as well
        inventory_ok = inventory.evaluation.passed and existence.enable_checkout

        status, reason = self._decide(
            basket, existence, inventory_ok, class_dates, quantities, coupons, content, tax, po_box
        )

        outcome = ValidationOutcome(
            status=status,
            reason=reason,
            enable_checkout=enable_checkout,
            inventory_matrix=inventory.matrix,
            evaluations=evaluations,
            checked_at=self.clock().isoformat(),
        )

        logger.info(
            f"Checkout validation for basket {basket.id}: status={status.value}, "
            f"reason={reason.value if reason else None}, enable_checkout={enable_checkout}",
            extra={"basket_id": basket.id}
        )

        return outcome

    @staticmethod
    def _decide(
        basket: Basket,
        existence: RuleEvaluation,
        inventory_ok: bool,
        class_dates: RuleEvaluation,
        quantities: RuleEvaluation,
        coupons: RuleEvaluation,
        content: RuleEvaluation,
        tax: Optional[RuleEvaluation],
        po_box: Optional[RuleEvaluation]
    ) -> tuple[ValidationStatus, Optional[ReasonCode]]:
        error = ValidationStatus.ERROR

        if (
            not basket.merchandise_total_price.available
            or not existence.passed
            or (not quantities.passed and quantities.reason is None)
        ):
            return error, None

        # Inventory shortfalls block checkout without a reason code
        if not inventory_ok:
            return error, None

        if class_dates.reason == RuleFailure.CLASS_DATE_PASSED:
            return error, ReasonCode.CLASS_DATE_ERROR

        if class_dates.reason == RuleFailure.CLASS_WITHIN_CUTOFF:
            return error, ReasonCode.WITHIN_48_HOURS

        if quantities.reason == RuleFailure.QUANTITY_RANGE:
            return error, ReasonCode.QUANTITY_ERROR

        if not coupons.passed:
            return error, ReasonCode.COUPON_ERROR

        # Empty basket: OK status, checkout blocked through enable_checkout
        if not content.passed:
            return ValidationStatus.OK, None

        if tax is not None and not tax.passed:
            return error, ReasonCode.TAX_ERROR

        if po_box is not None and not po_box.passed:
            return error, ReasonCode.POBOX_ERROR

        return ValidationStatus.OK, None
