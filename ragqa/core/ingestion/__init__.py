"""Ingestion pipeline: list, extract, chunk, embed and persist."""
