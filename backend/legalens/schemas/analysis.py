"""
Analysis Pydantic Schemas
Typed shape of a normalized document analysis.
"""

from typing import Literal

from pydantic import BaseModel, Field


RiskLevel = Literal['low', 'medium', 'high']

RISK_LEVELS = ('low', 'medium', 'high')
DEFAULT_RISK_LEVEL = 'medium'
DEFAULT_RISK_SCORE = 50


class Finding(BaseModel):
    """One flagged issue in a document."""
    text: str = Field(..., min_length=1)
    risk_level: RiskLevel = Field(DEFAULT_RISK_LEVEL, alias='riskLevel')
    suggestions: list[str] = []

    class Config:
        populate_by_name = True


class AnalysisResult(BaseModel):
    """Normalized output of one analysis pass."""
    findings: list[Finding] = []
    risk_level: RiskLevel = Field(DEFAULT_RISK_LEVEL, alias='riskLevel')
    risk_score: int = Field(DEFAULT_RISK_SCORE, ge=0, le=100, alias='riskScore')
    recommendations: str = ""

    class Config:
        populate_by_name = True

    def to_document_fields(self) -> dict:
        """Flatten into the column values stored on a completed document."""
        return {
            'risk_level': self.risk_level,
            'risk_score': self.risk_score,
            'findings': [f.model_dump(by_alias=True) for f in self.findings],
            'recommendations': self.recommendations,
        }
