from pydantic import BaseModel, Field

from camping.core.incidents.models import Category, Priority


class AnalyzeRequest(BaseModel):
    description: str = Field(..., min_length=5)
    location: str = ""


class AIAnalysisResult(BaseModel):
    priority: Priority
    category: Category
    title_suggestion: str
    suggested_steps: list[str]
