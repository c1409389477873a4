"""
Plan Repository - Data access layer for the plan catalog
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Plan


class PlanRepository(BaseRepository[Plan]):
    """Repository for catalog plans"""

    def __init__(self, db: Session):
        super().__init__(db, Plan)

    def get_by_id(self, plan_id: UUID) -> Optional[Plan]:
        """Get plan by ID"""
        return self.db.query(Plan).filter(Plan.plan_id == plan_id).first()

    def list_plans(self, include_inactive: bool = False) -> List[Plan]:
        """Plans ordered by price, cheapest first"""
        query = self.db.query(Plan)
        if not include_inactive:
            query = query.filter(Plan.is_active.is_(True))
        return query.order_by(Plan.price.asc(), Plan.name.asc()).all()
