# backend/lumina/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lumina.api.deps import store
from lumina.api.routes import router as api_router
from lumina.core.config import settings
from lumina.seed import seed_demo_products

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=settings.log_level.upper(),
)
logger = logging.getLogger(__name__)

if settings.seed_demo_data:
    seeded = seed_demo_products(store)
    logger.info("Seeded %s demo products", seeded)

app = FastAPI(title="Lumina Inventory API", version="0.1.0")

# Prefer a comma-separated allowlist, fallback to FRONTEND_URL/local
# Example: CORS_ORIGINS="https://inventory.example.com,http://localhost:3000"
cors_env = settings.cors_origins.strip()
if cors_env:
    ALLOW_ORIGINS = [o.strip() for o in cors_env.split(",") if o.strip()]
else:
    FRONTEND_URL = settings.frontend_url.strip()
    ALLOW_ORIGINS = sorted({FRONTEND_URL, "http://localhost:3000"})

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Content-Type"],
)

app.include_router(api_router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}
