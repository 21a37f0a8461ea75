from pydantic import BaseModel, Field

from camping.core.incidents.models import AIAnalysis, Category, Comment, Incident, Priority, Status


class IncidentCreate(BaseModel):
    title: str = Field("", max_length=500)
    description: str
    location: str = Field(..., max_length=255)
    priority: Priority = Priority.MEDIA
    category: Category = Category.PARCELAS
    ai_analysis: AIAnalysis | None = None


class StatusChange(BaseModel):
    status: Status


class CommentCreate(BaseModel):
    text: str


class IncidentMutationRead(BaseModel):
    incident: Incident
    changed: bool = True
    warning: str | None = None


class CommentMutationRead(BaseModel):
    comment: Comment
    warning: str | None = None


class SolutionRead(BaseModel):
    incident_id: str
    solution: str
