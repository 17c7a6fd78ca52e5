# dealership/models/motorcycles.py

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.sql import func

from dealership.core.enums import MotorcycleType
from dealership.database import Base


class Motorcycle(Base):
    __tablename__ = "motorcycles"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    brand = Column(String, nullable=False)
    model = Column(String, nullable=True)
    year = Column(Integer, nullable=True)
    engine_capacity = Column(Integer, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)

    type = Column(Enum(MotorcycleType, name="motorcycle_type"), nullable=True)
    color = Column(String, nullable=True)
    stock = Column(Integer, nullable=True)
    available = Column(Boolean, default=True, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_motorcycle_price_non_negative"),
    )
