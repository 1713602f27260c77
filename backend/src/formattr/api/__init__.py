"""HTTP/GraphQL API layer."""
