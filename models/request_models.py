"""
API Request Models

Pydantic models for API request validation.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class ClockSettingsRequest(BaseModel):
    depth: Optional[int] = None  # clamped to 0-MAX_DEPTH
    scale: Optional[float] = None  # clamped to 0.0-1.0
    opacity: Optional[float] = None  # clamped to 0.0-1.0
    line_width: Optional[float] = None
    line_color: Optional[List[int]] = Field(default=None, min_length=3, max_length=3)
    background_color: Optional[List[int]] = Field(default=None, min_length=3, max_length=3)
    show_fps: Optional[bool] = None


class KeyPressRequest(BaseModel):
    key: str  # KeyboardEvent.key value, e.g. "ArrowUp", "7", "c", " "


class ResizeRequest(BaseModel):
    width: int = Field(ge=0)
    height: int = Field(ge=0)
