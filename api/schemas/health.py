# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-10-07
# Description: health.py
# -----------------------------------------------------------------------------
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel

class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    timestamp: datetime
    auth: str

class AiHealthResponse(BaseModel):
    status: str
    model: Optional[str] = None
    message: Optional[str] = None

class SmokeTestSummary(BaseModel):
    total: int
    passed: int
    failed: int

class DeepHealthResponse(BaseModel):
    status: str
    results: Dict[str, bool]
    summary: SmokeTestSummary
