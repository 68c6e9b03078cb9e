"""FastAPI app entry point for the battle sim."""

import logging
import random

from fastapi import FastAPI

from api.battle import router as battle_router
from config import LOG_LEVEL, SIM_NAME, battle_seed
from engine.combat import default_battle

logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s:%(name)s:%(message)s")

app = FastAPI(
    title=SIM_NAME,
    description="A two-agent tabletop combat simulator driven one tick at a time",
    version="0.1.0",
)

# One battle per process; the host steps it
app.state.battle = default_battle()
app.state.rng = random.Random(battle_seed())

app.include_router(battle_router, prefix="/battle", tags=["Battle"])


@app.get("/")
def root() -> dict:
    """Root endpoint returning sim info."""
    return {"name": SIM_NAME, "version": "0.1.0", "status": "running"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"healthy": True}
