"""
Configuration, ORM models and database access.
"""
