"""FastAPI dependency injection providers."""

import numpy as np
from fastapi import Request

from hedgecalc.config import Settings
from hedgecalc.state import make_rng


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    return request.app.state.settings


def get_rng(request: Request) -> np.random.Generator:
    """Fresh generator per request, seeded from settings when configured."""
    return make_rng(request.app.state.settings)
