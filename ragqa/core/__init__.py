"""
Core business logic module.

Contains the ingestion and chat pipelines, chunking, extraction, model
family resolution and the exception hierarchy.
"""
