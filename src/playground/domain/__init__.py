"""
Domain Layer

Value objects, entities, errors and port interfaces.
"""
