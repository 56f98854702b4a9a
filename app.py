# Vercel FastAPI zero-config entrypoint; the app lives in backend/.
from backend.main import app  # noqa: F401
