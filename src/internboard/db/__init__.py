"""Database module - MongoDB connection and indexes."""

from .mongodb import MongoConnection, ensure_indexes

__all__ = ["MongoConnection", "ensure_indexes"]
