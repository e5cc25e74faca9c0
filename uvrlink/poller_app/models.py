from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    state: str
    connected: bool
    last_error: Optional[str] = None
    frame_count: int = 0
    jobs: List[str] = Field(default_factory=list)


class DeviceResponse(BaseModel):
    logger_type: str
    device: Optional[Dict[str, Any]] = None


class RecordsResponse(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)


class LogsResponse(BaseModel):
    events: List[Dict[str, Any]] = Field(default_factory=list)
