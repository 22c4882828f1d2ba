"""
Boundary layer for external system integrations.

Handles all interactions with external systems (S3, Bedrock, PostgreSQL).
Provides adapters and clients for infrastructure dependencies.
"""
