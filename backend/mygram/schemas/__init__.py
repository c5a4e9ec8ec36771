# Schemas package init
"""
MyGram Backend - Pydantic Request/Response Schemas
===================================================

Schemas are separate from the SQLAlchemy models so that the API contract
(what is accepted, what is exposed) can differ from the table layout. The
user password column, for instance, has no response counterpart.
"""
