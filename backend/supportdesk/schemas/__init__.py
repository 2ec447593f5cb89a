"""Schemas — Pydantic models for API request/response boundaries (camelCase on the wire)."""
