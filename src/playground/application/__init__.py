"""
Application Layer

Use cases built on the domain ports.
"""
