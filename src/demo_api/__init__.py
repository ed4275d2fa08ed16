"""FastAPI demo service for deadyet."""
