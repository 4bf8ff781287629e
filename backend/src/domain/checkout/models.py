"""Checkout validation models and enums"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class ValidationStatus(str, Enum):
    """Overall status of a checkout validation run"""
    OK = "OK"
    ERROR = "ERROR"


class ReasonCode(str, Enum):
    """Reason reported alongside an ERROR status"""
    CLASS_DATE_ERROR = "jclass-date-error"
    WITHIN_48_HOURS = "within-48-hours"
    QUANTITY_ERROR = "quantity-error"
    COUPON_ERROR = "coupon-error"
    TAX_ERROR = "tax-error"
    POBOX_ERROR = "pobox-error"


class RuleFailure(str, Enum):
    """Distinguishable failure reasons returned by individual rules"""
    CLASS_DATE_PASSED = "CLASS_DATE_PASSED"
    CLASS_WITHIN_CUTOFF = "CLASS_WITHIN_CUTOFF"
    QUANTITY_RANGE = "QUANTITY_RANGE"


class InventoryAvailability(int, Enum):
    IN_STOCK = 1
    INSUFFICIENT = -1


@dataclass
class RuleEvaluation:
    """Result of a single checkout rule.

    passed/reason form the tagged result: pass, plain fail (reason None) or
    fail with a RuleFailure. enable_checkout is the rule's contribution to the
    run-wide enable-checkout flag, which the engine AND-reduces.
    """
    rule_name: str
    passed: bool
    reason: Optional[RuleFailure] = None
    enable_checkout: bool = True
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, rule_name: str, enable_checkout: bool = True, **details: Any) -> "RuleEvaluation":
        return cls(rule_name=rule_name, passed=True, enable_checkout=enable_checkout, details=details)

    @classmethod
    def fail(
        cls,
        rule_name: str,
        reason: Optional[RuleFailure] = None,
        enable_checkout: bool = True,
        **details: Any
    ) -> "RuleEvaluation":
        return cls(
            rule_name=rule_name,
            passed=False,
            reason=reason,
            enable_checkout=enable_checkout,
            details=details
        )


@dataclass
class InventoryLevel:
    """Store inventory as returned by the lookup service for one store/product key"""
    quantity: int
    availability: Optional[int] = None


@dataclass
class InventoryRecord:
    """Reconciled store inventory for one store/product pair"""
    store_id: str
    product_id: str
    available_quantity: int
    requested_quantity: int
    availability: InventoryAvailability

    @property
    def key(self) -> str:
        return inventory_key(self.store_id, self.product_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "store_id": self.store_id,
            "product_id": self.product_id,
            "available_quantity": self.available_quantity,
            "requested_quantity": self.requested_quantity,
            "availability": self.availability.value,
        }


def inventory_key(store_id: str, product_id: str) -> str:
    """Composite key used by the lookup service: store id followed by product id."""
    return f"{store_id}{product_id}"


@dataclass
class InventoryRequestGroup:
    store_id: str
    product_ids: list[str] = field(default_factory=list)


@dataclass
class InventoryRequest:
    """Batched store inventory request, one group per store-routed shipment."""
    groups: list[InventoryRequestGroup] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the lookup service request body"""
        return {
            "stores": [
                {"storeId": group.store_id, "productIds": list(group.product_ids)}
                for group in self.groups
            ]
        }


@dataclass
class InventoryCheck:
    """Outcome of an inventory evaluator strategy"""
    evaluation: RuleEvaluation
    matrix: dict[str, InventoryRecord] = field(default_factory=dict)


@dataclass
class ValidationOutcome:
    """Final decision of the checkout gate.

    reason is only set when status is ERROR. enable_checkout may be False while
    status is OK (empty basket).
    """
    status: ValidationStatus
    enable_checkout: bool
    reason: Optional[ReasonCode] = None
    inventory_matrix: dict[str, InventoryRecord] = field(default_factory=dict)
    evaluations: list[RuleEvaluation] = field(default_factory=list)
    checked_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def __post_init__(self):
        if self.status == ValidationStatus.OK and self.reason is not None:
            raise ValueError("reason is only allowed on ERROR outcomes")

    @property
    def failed_rules(self) -> list[str]:
        return [evaluation.rule_name for evaluation in self.evaluations if not evaluation.passed]

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "reason": self.reason.value if self.reason else None,
            "enable_checkout": self.enable_checkout,
            "inventory_matrix": {
                key: record.to_dict() for key, record in self.inventory_matrix.items()
            },
            "failed_rules": self.failed_rules,
            "checked_at": self.checked_at,
        }


@dataclass(frozen=True)
class GateConfig:
    """Site configuration consumed by the checkout rules.

    Captured once per engine so rules never read global settings.
    """
    default_shipping_id: str = "me"
    limited_stock_threshold: int = 1
    ignore_max_quantity: bool = False
    class_cutoff_hours: int = 48
    class_date_format: str = "%m/%d/%Y %I:%M %p"
    class_timezone: str = "UTC"

    def __post_init__(self):
        if not is_known_timezone(self.class_timezone):
            raise ValueError(f"Unknown class timezone: '{self.class_timezone}'")

    @classmethod
    def from_settings(cls, settings: Any) -> "GateConfig":
        return cls(
            default_shipping_id=settings.DEFAULT_SHIPPING_ID,
            limited_stock_threshold=settings.LIMITED_STOCK_THRESHOLD,
            ignore_max_quantity=settings.IGNORE_MAX_QUANTITY,
            class_cutoff_hours=settings.CLASS_CUTOFF_HOURS,
            class_date_format=settings.CLASS_DATE_FORMAT,
            class_timezone=settings.CLASS_TIMEZONE,
        )


def is_known_timezone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
