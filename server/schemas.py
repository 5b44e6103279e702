"""Pydantic request/response schemas for the Flashdeck API."""

from typing import List, Optional
from pydantic import BaseModel, Field


# ---- Cards ----

class CardSchema(BaseModel):
    card_id: str
    question: str
    answer: str
    created: int
    last_reviewed: Optional[int] = None
    interval: int
    ease: float
    lapses: int
    next_review: Optional[int] = None


class CardsResponse(BaseModel):
    count: int
    cards: List[CardSchema]


class AddCardRequest(BaseModel):
    question: str = Field(..., max_length=5000)
    answer: str = Field(..., max_length=5000)


class ResetResponse(BaseModel):
    deleted: int


# ---- Review ----

class DueCardsResponse(BaseModel):
    due_count: int
    cards: List[CardSchema]


class ReviewRequest(BaseModel):
    card_id: str
    rating: str = Field(..., min_length=1, max_length=16, description="again | hard | good | easy")


class ReviewResponse(BaseModel):
    card: CardSchema
    next_review_in: str


# ---- Status ----

class StatusResponse(BaseModel):
    version: str
    unit: str
    collection: str
    storage_backend: str


class StatsResponse(BaseModel):
    total: int
    due: int
    unit: str
    never_reviewed: int
    total_lapses: int
    average_ease: Optional[float] = None
