from sqlalchemy import Column, String, Integer, Numeric, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.models.base import BaseModel


class Prediction(BaseModel):
    __tablename__ = "predictions"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    crop = Column(String(50), nullable=False)
    region = Column(String(100), nullable=False)
    yield_estimate = Column(Numeric(4, 1, asdecimal=False), nullable=False)
    confidence = Column(Integer, nullable=False)
    factors = Column(JSON)
    recommendations = Column(JSON)

    user = relationship("User", back_populates="predictions")
