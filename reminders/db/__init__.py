"""Database engine, session factory and declarative models."""
