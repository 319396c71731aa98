from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.hands import router as hands_router

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Bridgehand API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(hands_router)


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
