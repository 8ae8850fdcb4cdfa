"""
Core domain: event schemas, sanitization, validation and models.
"""
