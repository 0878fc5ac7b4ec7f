"""
Schemas module - Request/Response schemas for API endpoints.

Schemas are the API contract (what a client sends/receives); MongoDB
documents use the same snake_case field names.
"""
