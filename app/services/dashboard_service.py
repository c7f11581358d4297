"""Household overview numbers for the dashboard."""

from decimal import Decimal
from typing import Dict
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import CalendarEvent, Goal, Memory, Movie, ShoppingItem, Task, Wish
from app.services.finance_service import percent
from app.services.visibility import visible_owner_ids


class DashboardService:
    """Service for the dashboard summary."""

    @staticmethod
    def summary(db: Session, viewer_id: UUID) -> Dict:
        """
        Counts of open items per feature, scoped to the viewer's household.

        Returns:
            Dict with open tasks, unpurchased shopping items, unwatched movies,
            savings totals, event/wish/memory counts and household size
        """
        owners = visible_owner_ids(db, viewer_id)

        def count(model, *filters) -> int:
            return db.query(func.count(model.id)).filter(model.user_id.in_(owners), *filters).scalar()

        saved, target = (
            db.query(
                func.coalesce(func.sum(Goal.current_amount), 0),
                func.coalesce(func.sum(Goal.target_amount), 0),
            )
            .filter(Goal.user_id.in_(owners))
            .one()
        )
        saved = Decimal(str(saved))
        target = Decimal(str(target))

        return {
            "open_tasks": count(Task, Task.completed.is_(False)),
            "shopping_to_buy": count(ShoppingItem, ShoppingItem.purchased.is_(False)),
            "movies_to_watch": count(Movie, Movie.watched.is_(False)),
            "total_saved": saved,
            "total_target": target,
            "savings_progress_percent": percent(saved, target),
            "events": count(CalendarEvent),
            "wishes": count(Wish, Wish.purchased.is_(False)),
            "memories": count(Memory),
            "household_size": len(owners),
        }


# Singleton instance
dashboard_service = DashboardService()
