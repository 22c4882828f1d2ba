"""
AWS boundary modules.

Exports: S3ObjectStore, ObjectSummary
"""

from .s3_client import ObjectSummary, S3ObjectStore

__all__ = ["ObjectSummary", "S3ObjectStore"]
