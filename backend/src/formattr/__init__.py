"""Attribute service: GraphQL API over a MongoDB attribute collection."""
