"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from immosim.api.routes import simulation
from immosim.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Immosim",
    description="Rental Property Investment Simulator",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(simulation.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
