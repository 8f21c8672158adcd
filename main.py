"""
Recitation checker API.
POST /compare compares a transcribed attempt with the reference verse and
returns word-level feedback, tajweed annotations and scores.
"""
import logging

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

import config
from core.display import status_icon, status_style_class
from core.models import WordStatus
from core.recitation import compare_recitation
from tajweed.rules import get_rule_legend

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Quran Recitation Checker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CompareRequest(BaseModel):
    reference: str
    spoken: str = ""
    segment: bool = False


@app.get("/")
def health_check():
    return {
        "status": "ok",
        "message": "Quran Recitation Checker API is running",
        "tajweed_rules": len(get_rule_legend()),
    }


@app.post("/compare")
def compare(request: CompareRequest):
    """Compare spoken text against the reference verse. Never lets an engine error escape as a crash."""
    try:
        result = compare_recitation(request.reference, request.spoken, segment=request.segment)
    except Exception as e:
        logger.exception("Compare failed")
        raise HTTPException(status_code=500, detail=str(e))
    return result.to_dict()


@app.get("/tajweed/rules")
def tajweed_rules():
    return get_rule_legend()


@app.get("/status/{status}")
def status_display(status: str):
    try:
        word_status = WordStatus(status)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown status '{status}'")
    return {
        "status": word_status.value,
        "icon": status_icon(word_status),
        "class": status_style_class(word_status),
    }


if __name__ == "__main__":
    uvicorn.run(app, host=config.HOST, port=config.PORT)
