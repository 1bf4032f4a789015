"""
Database Package for PickResults Backend.

This package handles all database-related operations including:
- The Pick model definition using SQLAlchemy ORM
- Database engine and session management
- Table creation for first-time setup
"""
