"""API Schemas — Pydantic request/response models at the HTTP boundary."""
