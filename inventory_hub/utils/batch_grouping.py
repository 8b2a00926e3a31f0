"""
Batch grouping — split id lists into fixed-size chunks for Shopify calls,
and group product mappings by partner shop.
"""
import logging
from typing import Dict, List, Sequence, TypeVar

from inventory_hub.schemas.inventory_sync import ProductMapping

logger = logging.getLogger("batch_grouping")

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """Split items into consecutive chunks of at most size elements."""
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def group_mappings_by_partner(mappings: Sequence[ProductMapping]) -> Dict[str, List[ProductMapping]]:
    """Group mappings by partner shop, partners in first-seen order."""
    by_partner: Dict[str, List[ProductMapping]] = {}
    for mapping in mappings:
        by_partner.setdefault(mapping.partner_shop, []).append(mapping)
    logger.info(f"Grouped {len(mappings)} mappings into {len(by_partner)} partners")
    return by_partner
