from __future__ import annotations

import os

from .api import create_app

app = create_app()


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("CALCAM_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("CALCAM_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("calorie_cam.main:app", host=host, port=port, reload=False)
