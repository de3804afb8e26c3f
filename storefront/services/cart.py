# storefront/services/cart.py
import logging
from decimal import Decimal
from typing import List

from sqlalchemy import Numeric, delete, func, select, type_coerce
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import CartLineNotFound, EmptyCart, StoreError, ValidationError
from ..models import INT_MAX, CartLine, Product
from .base import is_storable_id, require_positive_int, store_operation

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _money(value) -> Decimal:
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT)


def _enriched(product: Product, quantity: int) -> dict:
    return {
        "id": product.id,
        "item_name": product.item_name,
        "item_price": product.item_price,
        "item_description": product.item_description,
        "item_rating": product.item_rating,
        "item_image": product.item_image,
        "quantity": quantity,
    }


def _enriched_lines():
    return select(Product, CartLine.quantity).join(CartLine, CartLine.product_id == Product.id)


class CartService:
    """
    The global cart.

    Per product a line is either absent or present with a positive quantity.
    Writes go through a single ``INSERT ... ON CONFLICT (product_id) DO UPDATE``
    so the store, not this process, decides between insert and update. Two
    racing first adds for one product therefore end up as one line.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_to_cart(self, product_id: int, quantity: int) -> None:
        """Insert a line, or add ``quantity`` to the existing one."""
        await self._upsert(product_id, quantity, additive=True, operation="adding product to cart")
        logger.info("Added %s x product %s to cart", quantity, product_id)

    async def set_quantity(self, product_id: int, quantity: int) -> None:
        """Insert a line, or replace the existing line's quantity."""
        await self._upsert(product_id, quantity, additive=False, operation="updating quantity in cart")
        logger.info("Set cart quantity of product %s to %s", product_id, quantity)

    async def _upsert(self, product_id: int, quantity: int, additive: bool, operation: str) -> None:
        require_positive_int("product_id", product_id)
        require_positive_int("quantity", quantity)

        dialect = self.session.bind.dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StoreError(operation, details={"dialect": dialect})

        table = CartLine.__table__
        stmt = insert(table).values(product_id=product_id, quantity=quantity)
        if additive:
            # the WHERE keeps the sum inside the column without computing it first
            stmt = stmt.on_conflict_do_update(
                index_elements=[table.c.product_id],
                set_={"quantity": table.c.quantity + stmt.excluded.quantity},
                where=table.c.quantity <= INT_MAX - stmt.excluded.quantity,
            )
        else:
            stmt = stmt.on_conflict_do_update(
                index_elements=[table.c.product_id],
                set_={"quantity": stmt.excluded.quantity},
            )

        async with store_operation(self.session, operation):
            exists = await self.session.execute(select(Product.id).where(Product.id == product_id))
            if exists.scalar_one_or_none() is None:
                await self.session.rollback()
                raise ValidationError("Product does not exist", details={"product_id": product_id})
            result = await self.session.execute(stmt)
            if result.rowcount == 0:
                # conflict row kept: the additive guard rejected the new total
                await self.session.rollback()
                raise ValidationError(
                    f"Cart quantity would exceed {INT_MAX}",
                    details={"product_id": product_id, "quantity": quantity},
                )
            await self.session.commit()

    async def get_line(self, product_id: int) -> dict:
        if not is_storable_id(product_id):
            raise CartLineNotFound(product_id)
        async with store_operation(self.session, "fetching cart items"):
            result = await self.session.execute(_enriched_lines().where(CartLine.product_id == product_id))
            # more than one row would break the one-line-per-product key: fail loudly
            row = result.one_or_none()
        if row is None:
            raise CartLineNotFound(product_id)
        product, quantity = row
        return _enriched(product, quantity)

    async def list_lines(self) -> List[dict]:
        async with store_operation(self.session, "fetching cart items"):
            result = await self.session.execute(_enriched_lines())
            rows = result.all()
        if not rows:
            raise EmptyCart()
        return [_enriched(product, quantity) for product, quantity in rows]

    async def remove(self, product_id: int) -> None:
        if not is_storable_id(product_id):
            raise CartLineNotFound(product_id)
        async with store_operation(self.session, "deleting product from cart"):
            result = await self.session.execute(
                delete(CartLine)
                .where(CartLine.product_id == product_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await self.session.rollback()
                raise CartLineNotFound(product_id)
            await self.session.commit()
        logger.info("Removed product %s from cart", product_id)

    async def totals(self) -> dict:
        """``sum(quantity)`` and ``sum(quantity * item_price)`` over the cart."""
        stmt = (
            select(
                func.sum(CartLine.quantity).label("total_items"),
                type_coerce(func.sum(CartLine.quantity * Product.item_price), Numeric(12, 2)).label("total_price"),
            )
            .select_from(CartLine)
            .join(Product, CartLine.product_id == Product.id)
        )
        async with store_operation(self.session, "fetching total items and price"):
            row = (await self.session.execute(stmt)).one()
        if row.total_items is None:
            raise EmptyCart()
        return {"total_items": int(row.total_items), "total_price": _money(row.total_price)}

    async def summary(self) -> dict:
        """Lines plus totals, both derived from one read so they always agree."""
        async with store_operation(self.session, "fetching cart summary"):
            result = await self.session.execute(_enriched_lines())
            rows = result.all()
        if not rows:
            raise EmptyCart()

        items = [_enriched(product, quantity) for product, quantity in rows]
        total_items = sum(item["quantity"] for item in items)
        total_price = sum((item["quantity"] * _money(item["item_price"]) for item in items), Decimal("0"))
        return {"items": items, "total_items": total_items, "total_price": _money(total_price)}
