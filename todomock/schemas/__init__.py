"""Schemas — Pydantic models that validate write payloads at the Store boundary."""
