from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from enum import Enum

class WasteCategory(str, Enum):
    BIODEGRADABLE = "biodegradable"
    PLASTIC = "plastic"
    METAL = "metal"

class Classification(BaseModel):
    """Structured reading of a single model reply"""
    model_config = ConfigDict(frozen=True)

    # Raw string so unexpected model labels pass through to the catalog
    category: str
    # Null when the model omits it
    confidence: Optional[float] = None
    reasoning: str = ""

class DisposalAdvice(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    instructions: List[str]

class ClassifyWasteRequest(BaseModel):
    image_data: Optional[str] = Field(None, alias="imageData", description="Image encoded as a data URI")

class ClassificationRecord(BaseModel):
    """Row written by the history store for each completed scan"""
    waste_type: str
    confidence: Optional[float] = None
    image_reference: str

class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    waste_type: str = Field(..., alias="wasteType")
    confidence: Optional[float] = None
    reasoning: str
    disposal_instructions: List[str] = Field(..., alias="disposalInstructions")

    def to_record(self, image_reference: str) -> ClassificationRecord:
        return ClassificationRecord(
            waste_type=self.waste_type,
            confidence=self.confidence,
            image_reference=image_reference,
        )
