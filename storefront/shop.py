# storefront/shop.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_session
from .schemas import ProductCreate, ProductCreated, ProductDetailOut, ProductListOut, ProductOut
from .services import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


def get_catalog_service(session: AsyncSession = Depends(get_session)) -> CatalogService:
    return CatalogService(session)


@router.get("", response_model=ProductListOut)
async def list_products(catalog: CatalogService = Depends(get_catalog_service)):
    products = await catalog.list_products()
    total_items = await catalog.cart_item_count()
    return {
        "products": [ProductOut.model_validate(p) for p in products],
        "total_items_in_cart": total_items,
    }


@router.get("/{product_id}", response_model=ProductDetailOut)
async def get_product(product_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    product = await catalog.get_product(product_id)
    total_items = await catalog.cart_item_count()
    return {"product": ProductOut.model_validate(product), "total_items_in_cart": total_items}


@router.post("/add", response_model=ProductCreated, status_code=status.HTTP_201_CREATED)
async def add_product(payload: ProductCreate, catalog: CatalogService = Depends(get_catalog_service)):
    product_id = await catalog.add_product(**payload.model_dump())
    return {"message": "Product added successfully", "productId": product_id}
