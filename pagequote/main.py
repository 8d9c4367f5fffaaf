from pagequote.api.main import app  # noqa: F401  (uvicorn entry point: pagequote.main:app)
