"""
API routes module.

FastAPI application and routers for the ingest, chat and health endpoints.
"""
