import os

from dotenv import load_dotenv

load_dotenv()

PORT = int(os.getenv("PORT", "3000"))

RECOMMENDATION_CACHE_TTL_S = float(os.getenv("RECOMMENDATION_CACHE_TTL_S", "300"))
CACHE_SWEEP_INTERVAL_S = float(os.getenv("CACHE_SWEEP_INTERVAL_S", "60"))

CORS_ALLOW_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
]
