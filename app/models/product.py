from datetime import datetime, UTC
from sqlalchemy import DateTime, Integer, String, Enum
from sqlalchemy.orm import Mapped, mapped_column
from app.db.database import Base
import enum

class Category(str, enum.Enum):
    """Product category"""
    FOOD = "FOOD"
    FASHION = "FASHION"
    ELECTRONIC = "ELECTRONIC"

class Product(Base):
    """Product model"""
    __tablename__ = "tbl_product"

    id: Mapped[int] = mapped_column("prod_id", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("prod_name", String(30), nullable=False)
    price: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    category: Mapped[Category] = mapped_column(Enum(Category), nullable=True)
    create_date: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))  # never updated
    update_date: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC)
    )
