"""
ragqa: retrieval-augmented question answering over documents stored in S3.
"""

__version__ = "0.1.0"
