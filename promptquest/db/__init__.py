"""Relational persistence: engine/session helpers and ORM models."""
