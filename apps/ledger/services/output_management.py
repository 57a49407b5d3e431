"""Output product service - processed coconut, husk and shell sold.

Outputs never reach the Record Store; they live in the Local Fallback
Cache only.
"""

from apps.records.timestamps import now_timestamp
from apps.ledger.entities import OUTPUTS, OutputProduct, ProductType, new_record_id
from .validation import amount, choice


def record_output(
    session,
    *,
    product_type,
    weight=None,
    price_per_kg=None,
    loads=None,
    price_per_load=None
):
    """
    Record a processed product sale.

    Husk takes ``loads`` and ``price_per_load``; coconut and shell take
    ``weight`` and ``price_per_kg``. The other pair is ignored.

    Returns:
        OutputProduct: The stored record (newest first in session.outputs)

    Raises:
        ValidationError: Unknown product type, or a missing/non-positive value
    """
    product = ProductType(choice(product_type, ProductType, field='product_type', label='Product type'))

    if product.sold_by_load:
        loads = amount(loads, field='loads', label='Loads', allow_zero=False, places=None)
        price_per_load = amount(
            price_per_load, field='price_per_load', label='Price per load', allow_zero=False, places=None
        )
        measures = {'loads': loads, 'price_per_load': price_per_load}
        total_price = loads * price_per_load
    else:
        weight = amount(weight, field='weight', label='Weight', allow_zero=False, places=None)
        price_per_kg = amount(
            price_per_kg, field='price_per_kg', label='Price per kg', allow_zero=False, places=None
        )
        measures = {'weight': weight, 'price_per_kg': price_per_kg}
        total_price = weight * price_per_kg

    record = OutputProduct(
        id=new_record_id(),
        date=now_timestamp(),
        product_type=product.value,
        total_price=total_price,
        **measures,
    )
    session.replace_local(OUTPUTS, [record] + session.outputs)
    return record


def remove_output(session, record_id):
    """Delete an output product; unknown ids leave the set unchanged."""
    session.replace_local(OUTPUTS, [record for record in session.outputs if record.id != record_id])
