"""GraphQL schema definitions with constraint directives.

Directive declarations are prepended by ``make_guarded_schema``.
"""

TYPE_DEFS = r"""
# =============================================================================
# Query Type
# =============================================================================

type Query {
    "Get the currently authenticated user."
    me: User @auth

    "Get all users. Requires `user:read` (from the User type)."
    users: [User!]!

    "Search users by name."
    searchUsers(
        term: String! @trim @stringLength(min: 2, max: 50)
        limit: Int = 10 @range(min: 1, max: 100)
    ): [User!]!
}

# =============================================================================
# Mutation Type
# =============================================================================

type Mutation {
    "Update a user's profile. Invalid fields are reported, not applied."
    updateProfile(
        id: ID!
        input: ProfileInput!
        validationErrors: [ValidatedInputError]
    ): UpdateProfileResult @hasPermissions(permissions: ["user:write"])
}

input ProfileInput {
    name: String @trim @stringLength(min: 1, max: 40)
    email: String @pattern(regexp: "^[^@\\s]+@[^@\\s]+$")
    role: String @allowedValues(values: ["admin", "member"])
    tags: [String!] @listLength(max: 5) @stringLength(max: 20)
}

type UpdateProfileResult {
    user: User
    errors: [String!]!
}

# =============================================================================
# Object Types
# =============================================================================

"Every field requires `user:read` unless it declares its own permissions."
type User @hasPermissions(permissions: ["user:read"]) {
    id: ID!
    name: String!

    "Masked unless the caller holds `user:email`."
    email(missingPermissions: [String!]): String
        @hasPermissions(permissions: ["user:email"], policy: RESOLVER)

    "Only visible with `user:admin`."
    role: String @hasPermissions(permissions: ["user:admin"])

    "Public."
    avatar: String @hasPermissions(permissions: [])
}
"""
