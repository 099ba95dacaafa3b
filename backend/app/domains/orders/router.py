from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.db.session import get_session
from app.domains.orders.service import hide_order, recent_orders
from timerecording.models import DEFAULT_ORDER_NR

router = APIRouter(prefix="/orders", tags=["orders"])
logger = get_logger(__name__)


class SuggestionsOut(BaseModel):
    project_manager: str
    default_order: str = DEFAULT_ORDER_NR
    orders: list[str]


class HideRequest(BaseModel):
    project_manager: str = Field(..., min_length=1)
    order_nr: str = Field(..., min_length=1)


class HideResponse(BaseModel):
    project_manager: str
    order_nr: str
    created: bool


@router.get("/recent", response_model=SuggestionsOut)
def get_recent_orders(manager: str = Query(..., min_length=1), db: Session = Depends(get_session)) -> SuggestionsOut:
    return SuggestionsOut(project_manager=manager, orders=recent_orders(db, manager))


@router.post("/hidden", response_model=HideResponse)
def post_hidden_order(payload: HideRequest, db: Session = Depends(get_session)) -> HideResponse:
    order_nr = payload.order_nr.strip()
    created = hide_order(db, payload.project_manager, order_nr)
    logger.info("order_hidden", manager=payload.project_manager, order_nr=order_nr, created=created)
    return HideResponse(project_manager=payload.project_manager, order_nr=order_nr, created=created)
