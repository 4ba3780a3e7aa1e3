"""FastAPI application for userhub."""
