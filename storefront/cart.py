# storefront/cart.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_session
from .schemas import CartAddRequest, CartLineOut, CartSummary, CartTotals, MessageOut, QuantityUpdate
from .services import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_cart_service(session: AsyncSession = Depends(get_session)) -> CartService:
    return CartService(session)


@router.post("/add", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def add_to_cart(payload: CartAddRequest, cart: CartService = Depends(get_cart_service)):
    await cart.add_to_cart(payload.product_id, payload.quantity)
    return {"message": "Product added to cart successfully"}


@router.get("/getById/{product_id}", response_model=CartLineOut)
async def get_cart_line(product_id: int, cart: CartService = Depends(get_cart_service)):
    return await cart.get_line(product_id)


@router.get("/getAllItem", response_model=List[CartLineOut])
async def get_all_items(cart: CartService = Depends(get_cart_service)):
    return await cart.list_lines()


@router.delete("/cart/delete/{product_id}", response_model=MessageOut)
async def remove_from_cart(product_id: int, cart: CartService = Depends(get_cart_service)):
    await cart.remove(product_id)
    return {"message": "Product removed from cart successfully"}


@router.patch("/cart/quantity/{product_id}", response_model=MessageOut)
async def update_quantity(
    product_id: int,
    payload: QuantityUpdate,
    cart: CartService = Depends(get_cart_service),
):
    await cart.set_quantity(product_id, payload.quantity)
    return {"message": "Cart updated successfully"}


@router.get("/totalQuantity", response_model=CartTotals)
async def total_quantity(cart: CartService = Depends(get_cart_service)):
    return await cart.totals()


@router.get("/summary", response_model=CartSummary)
async def cart_summary(cart: CartService = Depends(get_cart_service)):
    return await cart.summary()
