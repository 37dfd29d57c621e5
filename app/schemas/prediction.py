from typing import List

from pydantic import BaseModel, Field
from app.schemas.base import BaseSchema, TimestampSchema, NonEmptyStr, UTCDatetime


class PredictionCreate(BaseModel):
    crop: NonEmptyStr = Field(..., max_length=50)
    region: NonEmptyStr = Field(..., max_length=100)


class Factor(BaseSchema):
    name: str
    impact: str
    score: int
    description: str


class PredictionResult(BaseSchema):
    success: bool = True
    id: int
    crop: str
    region: str
    yield_estimate: float
    confidence: int
    factors: List[Factor]
    recommendations: List[str]
    generated_at: UTCDatetime
    valid_until: UTCDatetime


class PredictionRecord(TimestampSchema):
    id: int
    user_id: int
    crop: str
    region: str
    yield_estimate: float
    confidence: int
    factors: List[Factor] = []
    recommendations: List[str] = []


class PredictionHistory(BaseSchema):
    success: bool = True
    predictions: List[PredictionRecord]
    count: int
    timestamp: UTCDatetime


class YieldRecord(BaseSchema):
    year: str
    predicted: float
    actual: float
    crop: str
    accuracy: float


class YieldHistory(BaseSchema):
    success: bool = True
    data: List[YieldRecord]
    average_accuracy: float
    total_years: int
    timestamp: UTCDatetime
