# taskmanager/main.py  (entrypoint)
from dotenv import load_dotenv

# load the root .env before any settings object is built
load_dotenv()

from taskmanager.backend.core.config import get_settings  # noqa: E402
from taskmanager.backend.main import app as app  # noqa: E402


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("taskmanager.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
