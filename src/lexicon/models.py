"""Data models for square verification."""

from typing import List, Optional
from pydantic import BaseModel, Field


class ValidationError(BaseModel):
    """A single validation error."""
    code: str
    message: str
    word: Optional[str] = None
    index: Optional[int] = Field(None, ge=0)  # Row or column the word was read from


class ValidationResult(BaseModel):
    """Result of square validation."""
    valid: bool
    errors: List[ValidationError] = Field(default_factory=list)
    rows: List[str] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    grid: Optional[str] = None
