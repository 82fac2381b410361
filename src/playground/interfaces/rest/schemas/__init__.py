"""
REST API Schemas
"""
