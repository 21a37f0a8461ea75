from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from camping.core.rbac.models import Department


class Priority(str, Enum):
    BAJA = "Baja"
    MEDIA = "Media"
    ALTA = "Alta"
    CRITICA = "Crítica"


class Status(str, Enum):
    """
    Lifecycle stage. Every status can follow every other one; the only
    rule is that a change to the current status is not a transition.
    """
    PENDIENTE = "Pendiente"
    EN_PROCESO = "En Proceso"
    FINALIZADA = "Finalizada"


class Category(str, Enum):
    PARCELAS = "Parcelas"
    BUNGALOWS = "Bungalows"
    GLAMPING = "Glamping"
    RESTAURANT = "Restaurant"
    COCINA = "Cocina"
    TTOO = "TTOO"
    SANITARIOS = "Sanitarios"


class Comment(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str
    author: str
    text: str
    timestamp: datetime
    is_ai_generated: bool = False


class StatusHistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str
    previous_status: Status
    new_status: Status
    changed_by: str
    timestamp: datetime


class AIAnalysis(BaseModel):
    summary: str | None = None
    suggested_steps: list[str] = Field(default_factory=list)


class Incident(BaseModel):
    """
    Maintenance incident. Owns its comments and status history; the
    reporter fields are a copy taken at creation time.
    """
    id: str
    title: str
    description: str
    location: str
    priority: Priority
    status: Status = Status.PENDIENTE
    category: Category
    created_at: datetime
    updated_at: datetime
    reporter: str
    reporter_department: Department | None = None
    comments: list[Comment] = Field(default_factory=list)
    status_history: list[StatusHistoryEntry] = Field(default_factory=list)
    ai_analysis: AIAnalysis | None = None
