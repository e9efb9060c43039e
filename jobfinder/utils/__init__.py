"""Utility functions for Job Finder."""

from .parser import decode_json_payload, decode_lambda_body, validate_upstream

__all__ = ["decode_json_payload", "decode_lambda_body", "validate_upstream"]
