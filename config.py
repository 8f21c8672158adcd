"""
Runtime configuration via environment variables.
Loaded once at import; a .env file in the working directory is honoured.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# ----- Server -----
PORT = int(os.environ.get("PORT", "8001"))
HOST = os.environ.get("HOST", "0.0.0.0")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ----- Scoring -----
# Word similarity (0–100) at or above this is "partial"; below it is "wrong".
# 100 is always "correct" and is not configurable.
SIMILARITY_PARTIAL = int(os.environ.get("SIMILARITY_PARTIAL", "70"))

# Cost of leaving one reference or spoken word unpaired. A pair is only ever
# formed when its normalized edit distance is below 2 * gap cost.
ALIGNMENT_GAP_COST = float(os.environ.get("ALIGNMENT_GAP_COST", "0.4"))

# Overall score = weighted sum of the four sub-scores (equal quartiles by default)
WEIGHT_LETTER = float(os.environ.get("WEIGHT_LETTER", "0.25"))
WEIGHT_HARAKA = float(os.environ.get("WEIGHT_HARAKA", "0.25"))
WEIGHT_MADD = float(os.environ.get("WEIGHT_MADD", "0.25"))
WEIGHT_COMPLETENESS = float(os.environ.get("WEIGHT_COMPLETENESS", "0.25"))

# ----- CORS (production: set to specific origins) -----
CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
def get_cors_origins() -> list:
    """Return list of allowed CORS origins from env."""
    if CORS_ORIGINS == "*":
        return ["*"]
    return [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]
