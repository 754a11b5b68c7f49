"""
Modeles de sortie d'une generation de systeme
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class IngestionStatus(str, Enum):
    """Statuts possibles de la collecte de la grille"""
    PENDING = "pending"
    COLLECTING = "collecting"
    VALIDATING = "validating"
    SUCCESS = "success"
    SOURCE_ERROR = "source_error"
    VALIDATION_ERROR = "validation_error"


class GenerationStatus(str, Enum):
    """Statuts possibles d'un run de generation"""
    PENDING = "pending"
    INGESTING = "ingesting"
    CLASSIFYING = "classifying"
    EXPANDING = "expanding"
    COMPLETED = "completed"
    FAILED = "failed"


class MatchBreakdown(BaseModel):
    """Detail d'un match pour affichage (tier et tip retenus)"""
    position: int = Field(..., ge=1)
    description: str
    tier: str = Field(..., pattern=r'^(FullHedge|PartialHedge|Pinned)$')
    label: str = Field(..., description="Helgardering, Halvgardering ou Spik")
    tip: str = Field(..., pattern=r'^[1X2]{1,3}$')
    allowed_outcomes: List[str] = Field(..., min_length=1, max_length=3)
    uncertainty_score: float
    home_form: int = Field(default=0, ge=0)
    away_form: int = Field(default=0, ge=0)


class Notification(BaseModel):
    """Message de fin de run destine a l'utilisateur"""
    level: str = Field(..., pattern=r'^(success|error)$')
    title: str
    description: str
    lines: List[str] = Field(default_factory=list)


class GenerationResult(BaseModel):
    """Resultat d'une execution de generation"""
    status: str = Field(..., pattern=r'^(success|error)$')
    trace_id: str = Field(..., description="ID de tracabilite")
    run_id: str = Field(..., description="Identifiant du run")
    rows_count: int = Field(default=0, ge=0)
    rows: List[str] = Field(default_factory=list)
    matches: List[MatchBreakdown] = Field(default_factory=list)
    notification: Optional[Notification] = None
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    error_cause: Optional[str] = Field(default=None, description="Cause explicite en cas d'erreur")
    error_details: Optional[str] = Field(default=None, description="Details techniques de l'erreur")

    def model_dump_json_safe(self) -> Dict[str, Any]:
        """Convertit en dict JSON-serializable"""
        data = self.model_dump()
        data['generated_at'] = self.generated_at.isoformat()
        return data
