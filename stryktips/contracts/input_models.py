"""
Modeles de validation des donnees entrantes
Validation stricte des evenements de la source Svenska Spel avant classification
"""
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stryktips.config.generator_config import get_config


class SvenskaFolketInput(BaseModel):
    """Pourcentages joues par le public pour 1, X et 2"""
    one: float = Field(..., ge=0, description="Pourcentage victoire domicile")
    x: float = Field(..., ge=0, description="Pourcentage match nul")
    two: float = Field(..., ge=0, description="Pourcentage victoire exterieur")

    def as_percentages(self) -> Dict[str, float]:
        """Retourne les pourcentages indexes par symbole de resultat"""
        return {"1": self.one, "X": self.x, "2": self.two}


class DrawEventInput(BaseModel):
    """Modele validation d'un evenement de la grille"""
    model_config = ConfigDict(populate_by_name=True)

    event_description: str = Field(
        ..., alias="eventDescription", min_length=3, description="Format 'Domicile - Exterieur'"
    )
    svenska_folket: SvenskaFolketInput = Field(..., alias="svenskaFolket")

    @field_validator('event_description')
    @classmethod
    def validate_event_description(cls, v: str) -> str:
        v = v.strip()
        home, sep, away = v.partition(get_config().draw.description_separator)
        if not sep or not home.strip() or not away.strip():
            raise ValueError(f"Invalid event description: {v!r}. Expected 'Home - Away'.")
        return v
