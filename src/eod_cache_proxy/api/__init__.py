"""FastAPI application and process wiring."""
