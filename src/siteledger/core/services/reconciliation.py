"""
Reconciliation engine.

Folds the immutable project inventory ledger into the current state of every
(project, product) pair. The fold is pure: the same records always produce
the same snapshot, which makes it safe to recompute at any time in place of a
cached or suspect snapshot.

Per-action effects:
    checked_out  quantity += q, value += q * price
    returned     quantity -= q, value -= q * price   (both floored at 0)
    adjusted     quantity -= q                       (floored at 0, value kept)

Consumed stock keeps its value because its cost was capitalized at checkout.

Quantities and values are rounded to QUANTITY_DECIMALS after every step so
that decimal movements (0.3 out, 0.1 used three times) settle on exact zero
instead of binary float residue.
"""

from collections.abc import Iterable, Mapping

from siteledger.core.entities.ledger import CurrentInventoryItem, LedgerRecord, TransferAction
from siteledger.core.entities.product import Product

QUANTITY_DECIMALS = 6


def round_quantity(value: float) -> float:
    return round(value, QUANTITY_DECIMALS)


def movement_value(record: LedgerRecord) -> float:
    """Value moved by a checkout or return, falling back to quantity * price."""
    return record.total_value or record.quantity * record.sale_price


def _fold(
    project_id: str,
    product_id: str,
    records: list[LedgerRecord],
) -> CurrentInventoryItem | None:
    # sorted() is stable, so records sharing a timestamp keep their input order
    ordered = sorted(records, key=lambda r: r.created_at)

    quantity = 0.0
    value = 0.0
    transferred_in = 0.0
    returned_out = 0.0
    adjusted = 0.0
    reorder_point: float | None = None

    for record in ordered:
        if record.action is TransferAction.CHECKED_OUT:
            quantity = round_quantity(quantity + record.quantity)
            transferred_in = round_quantity(transferred_in + record.quantity)
            value = round_quantity(value + movement_value(record))
            if record.project_reorder_point is not None:
                reorder_point = record.project_reorder_point
        elif record.action is TransferAction.RETURNED:
            quantity = max(0.0, round_quantity(quantity - record.quantity))
            returned_out = round_quantity(returned_out + record.quantity)
            value = max(0.0, round_quantity(value - movement_value(record)))
        elif record.action is TransferAction.ADJUSTED:
            quantity = max(0.0, round_quantity(quantity - record.quantity))
            adjusted = round_quantity(adjusted + record.quantity)

    if not (quantity > 0 or transferred_in > 0 or returned_out > 0 or adjusted > 0):
        return None

    last = ordered[-1]
    unit_price = last.sale_price

    return CurrentInventoryItem(
        project_id=project_id,
        product_id=product_id,
        unit=last.unit,
        supplier=last.supplier,
        unit_price=unit_price,
        current_quantity=quantity,
        total_transferred_in=transferred_in,
        total_returned_out=returned_out,
        total_adjusted=adjusted,
        total_value=value,
        total_cost=round_quantity(quantity * unit_price),
        project_reorder_point=reorder_point,
        is_low_stock=reorder_point is not None and quantity <= reorder_point,
        last_record_id=last.record_id,
        last_transaction_at=last.created_at,
    )


def reconcile(records: Iterable[LedgerRecord]) -> list[CurrentInventoryItem]:
    """
    Fold ledger records into one CurrentInventoryItem per (project, product).

    Items come out in the order their key first appears in `records`.
    Products with no lifetime activity are left out.
    """
    groups: dict[tuple[str, str], list[LedgerRecord]] = {}
    for record in records:
        groups.setdefault((record.project_id, record.product_id), []).append(record)

    items: list[CurrentInventoryItem] = []
    for (project_id, product_id), group in groups.items():
        item = _fold(project_id, product_id, group)
        if item is not None:
            items.append(item)
    return items


def reconcile_one(
    records: Iterable[LedgerRecord],
    project_id: str,
    product_id: str,
) -> CurrentInventoryItem | None:
    """Current state of a single product in a single project, or None."""
    group = [
        r for r in records if r.project_id == project_id and r.product_id == product_id
    ]
    if not group:
        return None
    return _fold(project_id, product_id, group)


def enrich(
    items: Iterable[CurrentInventoryItem],
    products: Mapping[str, Product],
) -> list[CurrentInventoryItem]:
    """Attach catalog name, category and location. Figures are left untouched."""
    enriched = []
    for item in items:
        product = products.get(item.product_id)
        if product is None:
            enriched.append(item)
            continue
        enriched.append(
            item.model_copy(
                update={
                    "name": product.name,
                    "category": product.category or "Uncategorized",
                    "location": product.location,
                    "supplier": item.supplier or product.supplier,
                }
            )
        )
    return enriched
