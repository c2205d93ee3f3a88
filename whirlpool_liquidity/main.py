from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whirlpool_liquidity.api.routers import liquidity_curve
from whirlpool_liquidity.shared.config import get_settings

logging.basicConfig(level=get_settings().log_level)

app = FastAPI(title="Whirlpool Liquidity API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.include_router(liquidity_curve.router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
