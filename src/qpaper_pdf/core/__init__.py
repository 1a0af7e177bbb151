"""Core data models and ingestion checks for question papers."""
