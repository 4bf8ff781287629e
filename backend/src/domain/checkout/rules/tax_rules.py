"""Tax availability rule"""

from ..basket import Basket
from ..models import RuleEvaluation


RULE_NAME = "tax_availability"


def check_tax(basket: Basket) -> RuleEvaluation:
    """Basket total tax must be computed."""
    if basket.total_tax.available:
        return RuleEvaluation.ok(RULE_NAME)
    return RuleEvaluation.fail(RULE_NAME, tax_state=basket.total_tax.state.value)
