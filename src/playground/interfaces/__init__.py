"""
Interfaces Layer

Inbound adapters.
"""
