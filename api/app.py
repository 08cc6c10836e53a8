# api/app.py
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.routers import chat, comments, profiles, species

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Species Catalog API")

# CORS (dev-friendly)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- API under /api ----
app.include_router(species.router, prefix="/api")
app.include_router(comments.species_scoped, prefix="/api")
app.include_router(comments.comment_detail, prefix="/api")
app.include_router(profiles.router, prefix="/api")
app.include_router(chat.router, prefix="/api")


@app.get("/api/health", tags=["meta"])
def health():
    return {"ok": True}
