from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Optional
import logging

from anatomy import Point3D, region_catalogue
from config import Config
from logging_config import setup_logging
from pain import DEFAULT_PAIN_LEVEL, MAX_PAIN_LEVEL, MIN_PAIN_LEVEL, build_pain_point
from rules import classify

setup_logging(Config.log_level(), Config.LOG_FILE)
logger = logging.getLogger("painmap.api")

app = FastAPI(title="Pain Map Region API", version=Config.VERSION)
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.cors_origins(),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok", "version": Config.VERSION}


@app.get("/regions")
def regions():
    return {"regions": region_catalogue()}


# ============================================================
# REQUEST MODELS
# ============================================================

class PointInput(BaseModel):
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)
    z: float = Field(..., allow_inf_nan=False)

    def to_point(self) -> Point3D:
        return Point3D(self.x, self.y, self.z)


class PainPointInput(PointInput):
    painLevel: int = Field(DEFAULT_PAIN_LEVEL, ge=MIN_PAIN_LEVEL, le=MAX_PAIN_LEVEL)
    notes: Optional[str] = Field("", max_length=Config.MAX_NOTES_LENGTH)


# ============================================================
# CLASSIFY ENDPOINTS
# ============================================================

@app.post("/classify")
def classify_point(data: PointInput):
    match = classify(data.to_point())

    # Fallback hits mean the click landed between modelled bands
    if match.is_fallback:
        logger.warning(
            "No precise region for (%.3f, %.3f, %.3f); used %s",
            data.x, data.y, data.z, match.rule,
        )

    result = match.as_dict()
    result["rule"] = match.rule
    result["fallback"] = match.is_fallback
    return result


@app.post("/pain-points")
def create_pain_point(data: PainPointInput):
    try:
        record = build_pain_point(data.to_point(), data.painLevel, data.notes or "")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Pain point %s: %s level %d", record.id, record.label, record.pain_level)
    return record.as_dict()
