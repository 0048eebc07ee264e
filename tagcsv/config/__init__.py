"""
Configuration loading and validation for mapper settings.

Provides a strongly typed settings object populated from environment
variables with upfront validation.
"""
