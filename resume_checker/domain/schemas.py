"""Pydantic model of the evaluation returned to callers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SkillsBreakdown(BaseModel):
    matched: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)


class SectionAnalysis(BaseModel):
    summary: str
    skillsSection: str
    experience: str
    projects: str
    education: str
    formatting: str
    keywords: str


class EvaluationResponse(BaseModel):
    """ATS evaluation of one resume against one job title."""

    model_config = ConfigDict(extra="allow")

    atsScore: int = Field(ge=0, le=100)
    roleDetected: str
    skills: SkillsBreakdown
    analysis: SectionAnalysis
    suggestions: list[str] = Field(default_factory=list)
