# storefront/services/catalog.py
import logging
from decimal import Decimal
from typing import List

import pydantic
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ProductNotFound, ValidationError
from ..models import CartLine, Product
from ..schemas import ProductCreate
from .base import is_storable_id, store_operation

logger = logging.getLogger(__name__)


class CatalogService:
    """Product reads and inserts on one request's session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_products(self) -> List[Product]:
        async with store_operation(self.session, "fetching products"):
            result = await self.session.execute(select(Product))
            return list(result.scalars().all())

    async def get_product(self, product_id: int) -> Product:
        if not is_storable_id(product_id):
            raise ProductNotFound(product_id)
        async with store_operation(self.session, "fetching product"):
            result = await self.session.execute(select(Product).where(Product.id == product_id))
            product = result.scalar_one_or_none()
        if product is None:
            logger.info("Product %s not found", product_id)
            raise ProductNotFound(product_id)
        return product

    async def add_product(
        self,
        item_name: str,
        item_price: Decimal,
        item_description: str,
        item_rating: int,
        item_image: str,
    ) -> int:
        """Insert a product and return the id the store generated for it."""
        try:
            payload = ProductCreate(
                item_name=item_name,
                item_price=item_price,
                item_description=item_description,
                item_rating=item_rating,
                item_image=item_image,
            )
        except pydantic.ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            raise ValidationError(
                "All fields are required and must be well-formed",
                details={"fields": ", ".join(fields)},
            ) from exc

        async with store_operation(self.session, "adding product"):
            product = Product(**payload.model_dump())
            self.session.add(product)
            await self.session.commit()
        logger.info("Product %r added with id %s", product.item_name, product.id)
        return product.id

    async def cart_item_count(self) -> int:
        """Units across the whole cart; 0 when it is empty."""
        async with store_operation(self.session, "fetching total items"):
            result = await self.session.execute(select(func.coalesce(func.sum(CartLine.quantity), 0)))
            return int(result.scalar_one())
