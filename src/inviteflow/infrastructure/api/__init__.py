"""HTTP API for InviteFlow (FastAPI)."""
