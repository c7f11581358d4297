"""Business logic for savings goals and expenses."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.expense import Expense
from app.models.goal import Goal
from app.services.errors import ValidationError
from app.services.household_service import OwnedEntityService, require_text
from app.services.visibility import require_owner

ZERO = Decimal("0")


def _positive(amount: Decimal, label: str) -> Decimal:
    if amount is None or amount <= 0:
        raise ValidationError(f"{label} must be greater than zero")
    return amount


def percent(part: Decimal, whole: Decimal) -> float:
    """Progress percentage capped at 100; zero when there is no target."""
    if not whole:
        return 0.0
    return round(min(float(part) / float(whole) * 100, 100.0), 1)


class GoalService(OwnedEntityService):
    """Service for savings goals."""

    model = Goal
    editable_fields = ("name", "target_amount")

    def ordering(self) -> list:
        return [Goal.created_at.asc()]

    def create_goal(
        self, db: Session, owner_id: UUID, name: str, target_amount: Decimal
    ) -> Goal:
        return self.create(
            db,
            owner_id,
            name=require_text(name, "Goal name"),
            target_amount=_positive(target_amount, "Target amount"),
            current_amount=ZERO,
        )

    def contribute(
        self, db: Session, goal_id: UUID, viewer_id: UUID, amount: Decimal
    ) -> Goal:
        """
        Add money to a goal.

        The increment is applied in SQL so two contributions sent at the same
        time are both counted.
        """
        _positive(amount, "Contribution")
        goal = self.get(db, goal_id, viewer_id)
        require_owner(viewer_id, goal)

        db.query(Goal).filter(Goal.id == goal_id).update(
            {Goal.current_amount: Goal.current_amount + amount},
            synchronize_session=False,
        )
        db.commit()
        db.refresh(goal)
        return goal


class ExpenseService(OwnedEntityService):
    """Service for expenses."""

    model = Expense
    editable_fields = ("description", "amount", "date", "category")

    def ordering(self) -> list:
        return [Expense.date.desc(), Expense.created_at.desc()]

    def create_expense(
        self,
        db: Session,
        owner_id: UUID,
        description: str,
        amount: Decimal,
        spent_on: Optional[date] = None,
        category: Optional[str] = None,
    ) -> Expense:
        return self.create(
            db,
            owner_id,
            description=require_text(description, "Description"),
            amount=_positive(amount, "Amount"),
            date=spent_on or date.today(),
            category=(category or "other").strip().lower() or "other",
        )

    def month_expenses(
        self, db: Session, viewer_id: UUID, today: Optional[date] = None
    ) -> List[Expense]:
        """Expenses from the first day of the current month onwards."""
        today = today or date.today()
        first_day = today.replace(day=1)
        return self.list_visible(db, viewer_id, Expense.date >= first_day)

    @staticmethod
    def totals_by_category(expenses: List[Expense]) -> Dict[str, Decimal]:
        totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
        for expense in expenses:
            totals[expense.category] += expense.amount
        return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


class FinanceService:
    """Aggregates goals and expenses for the finance overview."""

    @staticmethod
    def summary(db: Session, viewer_id: UUID, today: Optional[date] = None) -> Dict:
        goals = goal_service.list_visible(db, viewer_id)
        expenses = expense_service.month_expenses(db, viewer_id, today=today)

        total_saved = sum((g.current_amount for g in goals), ZERO)
        total_target = sum((g.target_amount for g in goals), ZERO)
        total_expenses = sum((e.amount for e in expenses), ZERO)

        return {
            "goals": goals,
            "expenses": expenses,
            "total_saved": total_saved,
            "total_target": total_target,
            "progress_percent": percent(total_saved, total_target),
            "month_total_expenses": total_expenses,
            "expenses_by_category": ExpenseService.totals_by_category(expenses),
        }


# Singleton instances
goal_service = GoalService()
expense_service = ExpenseService()
finance_service = FinanceService()
