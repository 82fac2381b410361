"""
REST Interface

FastAPI application and routes.
"""
