from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.logging_config import configure_logging
from api.routes.harmony import router as harmony_router
from tools.registry import get_registry

configure_logging()

app = FastAPI(title="Harmonic Guidance")

# Browser clients of the harmony API (local dev servers)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(harmony_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Return a simple liveness check."""
    return {"status": "ok"}


@app.get("/tools")
def list_tools() -> list[dict]:
    """List the harmony tools with their parameter specs."""
    return get_registry().list_tools()
