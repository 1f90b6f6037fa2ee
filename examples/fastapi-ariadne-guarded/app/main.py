"""FastAPI + Ariadne + guardql example."""

import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.data import get_token
from app.resolvers import resolvers
from app.schema import TYPE_DEFS

from guardql import GuardConfig
from guardql.adapters.ariadne import GuardedGraphQL, make_guarded_schema

DEBUG = os.getenv("DEBUG", "false").lower() == "true"

guard_config = GuardConfig(
    # Full missing-permissions lists in error messages
    debug=DEBUG,
    dedupe_permissions=True,
)

schema = make_guarded_schema(TYPE_DEFS, *resolvers, config=guard_config)

app = FastAPI(
    title="guardql Example API",
    description="GraphQL API with guardql constraint directives",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_context_value(request: Request, data: dict | None = None) -> dict:
    token = get_token(request.headers.get("Authorization", ""))
    return {
        "request": request,
        "current_user_id": token[0] if token else None,
        "granted_permissions": token[1] if token else None,
        "is_authenticated": token is not None,
    }


graphql_app = GuardedGraphQL(
    schema,
    config=guard_config,
    debug=DEBUG,
    context_value=get_context_value,
)

app.mount("/graphql", graphql_app)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "debug": guard_config.debug}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
