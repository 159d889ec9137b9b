"""
Service layer for Global Gourmet Scout backend.

Contains the orchestration that:
- Builds prompts and calls Gemini with Google Search grounding
- Recovers JSON from the model text and maps it into Pydantic models
- Enriches results with stock-photo providers
- Persists favorites and saved API keys through the storage service

Services act as the glue between routes (HTTP layer) and agents/storage.
Import from the submodules directly.
"""
