"""Product repository for the basic entity-mapping chapter.

A standalone tutorial piece: no API route uses it, only its tests do.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.product import Product


class ProductRepository:
    def __init__(self, session: Session):
        self.session = session

    def save(self, product: Product) -> Product:
        self.session.add(product)
        self.session.flush()
        return product

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self.session.get(Product, product_id)

    def find_all(self) -> List[Product]:
        return list(self.session.scalars(select(Product).order_by(Product.id)))

    def delete(self, product: Product) -> None:
        self.session.delete(product)
        self.session.flush()
