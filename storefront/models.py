from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text

from .database import Base

# largest value a signed 32-bit INTEGER column holds
INT_MAX = 2**31 - 1


class Product(Base):
    __tablename__ = "product"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_name = Column(String(255), nullable=False)
    item_price = Column(Numeric(10, 2), nullable=False)   # exact money
    item_description = Column(Text, nullable=False)
    item_rating = Column(Integer, nullable=False)
    item_image = Column(String(1024), nullable=False)

    __table_args__ = (
        CheckConstraint("item_price >= 0", name="ck_product_price_nonneg"),
    )


class CartLine(Base):
    __tablename__ = "cart"

    # one line per product: the primary key is the product itself
    product_id = Column(Integer, ForeignKey("product.id", ondelete="CASCADE"), primary_key=True, autoincrement=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_cart_quantity_pos"),
    )
