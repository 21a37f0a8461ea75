from pydantic import BaseModel

from camping.core.incidents.models import Category, Priority, Status


class DashboardCounts(BaseModel):
    pending_count: int
    high_priority_count: int
    resolved_count: int


class CategoryCount(BaseModel):
    category: Category
    count: int
    percentage: float


class PriorityCount(BaseModel):
    priority: Priority
    count: int


class StatusCount(BaseModel):
    status: Status
    count: int


class StatsRead(BaseModel):
    total: int
    counts: DashboardCounts
    by_category: list[CategoryCount]
    by_priority: list[PriorityCount]
    by_status: list[StatusCount]
