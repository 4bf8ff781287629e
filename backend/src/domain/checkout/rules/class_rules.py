"""Scheduled class date rule"""

import json
import logging
import re
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from ..basket import (
    CLASS_DATE_KEY,
    PRODUCT_TYPE_CLASS,
    SALES_CHANNEL_SCHEDULED,
    Basket,
    ProductLineItem
)
from ..exceptions import DataIntegrityError
from ..models import GateConfig, RuleEvaluation, RuleFailure
from ..port import Clock


logger = logging.getLogger(__name__)

RULE_NAME = "class_date"

NON_ASCII_PATTERN = re.compile(r"[^\x00-\x7f]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def is_scheduled_class(item: ProductLineItem) -> bool:
    return item.product_type == PRODUCT_TYPE_CLASS and item.sales_channel == SALES_CHANNEL_SCHEDULED


def parse_class_start(item: ProductLineItem, config: GateConfig) -> datetime:
    """Parse the class start time from the line item's JSON payload.

    Unicode whitespace is normalized and any other non-ASCII character (e.g.
    direction marks pasted from the catalog) stripped before parsing with the
    configured format. The result is localized to the configured class timezone.

    Raises:
        DataIntegrityError: If the payload or its date cannot be parsed
    """
    try:
        payload = json.loads(item.class_payload or "")
        raw_date = payload[CLASS_DATE_KEY]
    except (ValueError, TypeError, KeyError) as e:
        raise DataIntegrityError(
            f"Class payload for product '{item.product_id}' is malformed",
            details={"product_id": item.product_id, "payload": item.class_payload}
        ) from e

    # Unicode spaces become plain spaces so "10:00\u202fAM" still matches "%I:%M %p"
    cleaned = NON_ASCII_PATTERN.sub("", WHITESPACE_PATTERN.sub(" ", str(raw_date))).strip()
    try:
        start = datetime.strptime(cleaned, config.class_date_format)
    except ValueError as e:
        raise DataIntegrityError(
            f"Class date '{cleaned}' for product '{item.product_id}' does not match "
            f"'{config.class_date_format}'",
            details={"product_id": item.product_id, "class_date": cleaned}
        ) from e

    return start.replace(tzinfo=ZoneInfo(config.class_timezone))


def check_class_dates(basket: Basket, config: GateConfig, clock: Clock) -> RuleEvaluation:
    """Reject scheduled classes that already started or start within the cutoff.

    Stops at the first offending line item.

    Args:
        basket: Basket under validation
        config: Gate configuration (date format, timezone, cutoff hours)
        clock: Returns the current timezone-aware time

    Returns:
        RuleEvaluation failing with CLASS_DATE_PASSED or CLASS_WITHIN_CUTOFF
    """
    now = clock()
    cutoff = timedelta(hours=config.class_cutoff_hours)

    for item in basket.product_line_items:
        if not is_scheduled_class(item):
            continue

        start = parse_class_start(item, config)

        if start <= now:
            logger.debug(f"Basket {basket.id}: class '{item.product_id}' started at {start}")
            return RuleEvaluation.fail(
                RULE_NAME,
                reason=RuleFailure.CLASS_DATE_PASSED,
                enable_checkout=False,
                product_id=item.product_id,
                class_start=start.isoformat()
            )

        if start - now <= cutoff:
            logger.debug(f"Basket {basket.id}: class '{item.product_id}' starts within cutoff")
            return RuleEvaluation.fail(
                RULE_NAME,
                reason=RuleFailure.CLASS_WITHIN_CUTOFF,
                enable_checkout=False,
                product_id=item.product_id,
                class_start=start.isoformat()
            )

    return RuleEvaluation.ok(RULE_NAME)
