"""In-memory users and API tokens."""

USERS = {
    "1": {
        "id": "1",
        "name": "Ada",
        "email": "ada@example.com",
        "role": "admin",
        "avatar": "https://example.com/ada.png",
    },
    "2": {
        "id": "2",
        "name": "Grace",
        "email": "grace@example.com",
        "role": "member",
        "avatar": None,
    },
}

# token -> (user id, granted permissions)
TOKENS = {
    "admin-token": ("1", {"user:read", "user:email", "user:admin", "user:write"}),
    "member-token": ("2", {"user:read"}),
}


def get_token(authorization: str) -> tuple[str, set[str]] | None:
    if not authorization.startswith("Bearer "):
        return None
    return TOKENS.get(authorization.removeprefix("Bearer "))
