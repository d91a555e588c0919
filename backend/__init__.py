"""Backend bootstrap: settings and the FastAPI application factory."""
