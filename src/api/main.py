"""
FastAPI application for the RAG API.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .deps import build_rag_system
from .routes import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build and index the RAG system on startup; drop it on shutdown."""
    app.state.rag_system = build_rag_system()
    yield
    app.state.rag_system = None


app = FastAPI(
    title="Platform RAG API",
    description="Hybrid keyword + vector search over AI development platform documents",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.api.main:app", host="0.0.0.0", port=8000)
