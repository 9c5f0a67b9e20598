# greeksurface/db/models.py
from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .db import Base

class Calculation(Base):
    __tablename__ = "calculations"
    id = Column(Integer, primary_key=True)
    spot = Column(Float, nullable=False)
    strike = Column(Float, nullable=False)
    risk_free_rate = Column(Float, nullable=False)
    time_to_expiry = Column(Float, nullable=False)   # years
    volatility = Column(Float, nullable=False)
    kind = Column(String(4), nullable=False)         # call / put
    quantity = Column(String(8), nullable=False)     # price, delta, ...
    label = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    points = relationship("SurfacePoint", back_populates="calc", cascade="all, delete")

class SurfacePoint(Base):
    __tablename__ = "surface_points"
    id = Column(Integer, primary_key=True)
    calculation_id = Column(Integer, ForeignKey("calculations.id"), index=True)
    spot = Column(Float, nullable=False)
    time = Column(Float, nullable=False)
    value = Column(Float, nullable=True)   # NULL where the surface is not finite
    calc = relationship("Calculation", back_populates="points")
