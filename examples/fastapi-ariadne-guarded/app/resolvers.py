"""GraphQL resolvers for the guarded example."""

from ariadne import MutationType, ObjectType, QueryType

from app.data import USERS
from guardql.decorators import masked_on_missing_permissions

# =============================================================================
# Query Resolvers
# =============================================================================

query = QueryType()


@query.field("me")
async def resolve_me(_, info):
    """Get the current user. Only called for authenticated requests."""
    return USERS.get(info.context["current_user_id"])


@query.field("users")
async def resolve_users(_, info):
    return list(USERS.values())


@query.field("searchUsers")
async def resolve_search_users(_, info, term: str, limit: int):
    """``term`` arrives trimmed and length-checked."""
    term = term.lower()
    return [user for user in USERS.values() if term in user["name"].lower()][:limit]


# =============================================================================
# Mutation Resolvers
# =============================================================================

mutation = MutationType()


@mutation.field("updateProfile")
async def resolve_update_profile(_, info, id: str, input: dict, validationErrors=None):
    """
    Update a user's profile.

    Rejected input fields arrive as ``None`` and are described in
    ``validationErrors``; only valid fields are applied.
    """
    user = USERS.get(id)
    if user is None:
        return {"user": None, "errors": [f"User {id} not found"]}

    user.update({key: value for key, value in input.items() if value is not None})

    errors = [
        f"{'.'.join(error['path'])}: {error['message']}"
        for error in validationErrors or []
    ]
    return {"user": user, "errors": errors}


# =============================================================================
# Object Resolvers
# =============================================================================

user = ObjectType("User")


def mask_email(email: str) -> str:
    name, domain = email.split("@")
    return f"{name[0]}{'*' * (len(name) - 1)}@{domain}"


@user.field("email")
@masked_on_missing_permissions(mask_email)
def resolve_email(obj, info):
    return obj["email"]


resolvers = [query, mutation, user]
