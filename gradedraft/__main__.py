import os

import uvicorn

from gradedraft.config import load_settings
from gradedraft.main import configure_logging


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "gradedraft.main:app",
        host=os.environ.get("GRADEDRAFT_HOST", "127.0.0.1"),
        port=int(os.environ.get("GRADEDRAFT_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
