"""API endpoints for savings goals and expenses."""

import datetime as dt
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.common import OwnedOut, serialize, serialize_all
from app.database import get_db
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.finance_service import expense_service, finance_service, goal_service

router = APIRouter(prefix="/finance", tags=["finance"])


# =============================================================================
# Request/Response Models
# =============================================================================


class GoalIn(BaseModel):
    name: str = Field(..., max_length=255)
    target_amount: Decimal


class ContributionIn(BaseModel):
    amount: Decimal


class ExpenseIn(BaseModel):
    description: str = Field(..., max_length=500)
    amount: Decimal
    date: Optional[dt.date] = None
    category: Optional[str] = Field(None, max_length=64)


class GoalOut(OwnedOut):
    name: str
    target_amount: float
    current_amount: float
    progress_percent: float
    created_at: Optional[dt.datetime] = None


class ExpenseOut(OwnedOut):
    description: str
    amount: float
    date: dt.date
    category: str
    created_at: Optional[dt.datetime] = None


class FinanceSummary(BaseModel):
    goals: List[GoalOut]
    expenses: List[ExpenseOut]
    total_saved: float
    total_target: float
    progress_percent: float
    month_total_expenses: float
    expenses_by_category: Dict[str, float]


# =============================================================================
# Overview
# =============================================================================


@router.get("", response_model=FinanceSummary)
async def finance_overview(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Household goals, this month's expenses and their totals."""
    summary = finance_service.summary(db, user.id)
    return FinanceSummary(
        goals=serialize_all(GoalOut, summary["goals"], user.id),
        expenses=serialize_all(ExpenseOut, summary["expenses"], user.id),
        total_saved=float(summary["total_saved"]),
        total_target=float(summary["total_target"]),
        progress_percent=summary["progress_percent"],
        month_total_expenses=float(summary["month_total_expenses"]),
        expenses_by_category={k: float(v) for k, v in summary["expenses_by_category"].items()},
    )


# =============================================================================
# Goals
# =============================================================================


@router.post("/goals", response_model=GoalOut, status_code=status.HTTP_201_CREATED)
async def create_goal(body: GoalIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    goal = goal_service.create_goal(db, user.id, body.name, body.target_amount)
    return serialize(GoalOut, goal, user.id)


@router.post("/goals/{goal_id}/contribute", response_model=GoalOut)
async def contribute(
    goal_id: UUID,
    body: ContributionIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = goal_service.contribute(db, goal_id, user.id, body.amount)
    return serialize(GoalOut, goal, user.id)


@router.delete("/goals/{goal_id}")
async def delete_goal(goal_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    goal_service.delete(db, goal_id, user.id)
    return {"success": True}


# =============================================================================
# Expenses
# =============================================================================


@router.get("/expenses", response_model=List[ExpenseOut])
async def list_expenses(
    include_past: bool = Query(False, alias="all", description="Include expenses from earlier months"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Household expenses, newest first. Only the current month unless ``all`` is set."""
    if include_past:
        expenses = expense_service.list_visible(db, user.id)
    else:
        expenses = expense_service.month_expenses(db, user.id)
    return serialize_all(ExpenseOut, expenses, user.id)


@router.post("/expenses", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
async def create_expense(body: ExpenseIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    expense = expense_service.create_expense(
        db,
        user.id,
        body.description,
        body.amount,
        spent_on=body.date,
        category=body.category,
    )
    return serialize(ExpenseOut, expense, user.id)


@router.delete("/expenses/{expense_id}")
async def delete_expense(expense_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    expense_service.delete(db, expense_id, user.id)
    return {"success": True}
