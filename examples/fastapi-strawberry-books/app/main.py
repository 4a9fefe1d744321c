"""FastAPI + Strawberry + batchql example."""

import os
from collections.abc import Iterator
from contextlib import asynccontextmanager
from typing import Any

import strawberry
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from strawberry.fastapi import GraphQLRouter

from app import database as db
from app.schema import Query
from batchql import get_context_loaders
from batchql.adapters.strawberry import DataLoaderExtension

DEBUG = os.getenv("DEBUG", "false").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    print("[STARTUP] Initializing SQLite database")
    await db.init_db()
    yield


app = FastAPI(
    title="batchql Strawberry Example",
    description="Book catalog GraphQL API with batched entity loading",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def get_context(request: Request) -> dict[str, Any]:
    """Get GraphQL context with the entity stores.

    DataLoaderExtension adds a fresh loader registry to it per operation.
    """
    return {
        "request": request,
        "books": db.books_store,
        "authors": db.authors_store,
    }


class LoaderStatsExtension(DataLoaderExtension):
    """Also report loader statistics in the response extensions."""

    def on_execute(self) -> Iterator[None]:
        yield
        # Read before the registry is closed at the end of the operation
        registry = get_context_loaders(self.execution_context.context)
        self._loader_stats = registry.stats if registry is not None else {}

    def get_results(self) -> dict[str, Any]:
        return {"batchql": getattr(self, "_loader_stats", {})}


schema = strawberry.Schema(
    query=Query,
    extensions=[LoaderStatsExtension if DEBUG else DataLoaderExtension],
)

graphql_app = GraphQLRouter(
    schema,
    context_getter=get_context,
)

app.include_router(graphql_app, prefix="/graphql")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/db/stats")
async def db_stats():
    """Get database call statistics."""
    return {"calls": db.call_count}


@app.post("/db/stats/reset")
async def reset_db_stats():
    """Reset database call statistics."""
    db.reset_call_count()
    return {"status": "reset"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
