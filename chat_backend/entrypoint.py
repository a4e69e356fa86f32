import argparse
import sys

import uvicorn

from chat_backend.app.core.config import Settings
from chat_backend.app.main import create_app


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="chat-backend")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--db-url", default=None, help="SQLAlchemy database URL")
    parser.add_argument("--log-level", default=Settings.LOG_LEVEL)
    args = parser.parse_args(argv)

    Settings.LOG_LEVEL = args.log_level
    app = create_app(database_url=args.db_url)

    uvicorn.run(app, host=args.host, port=args.port, log_level="warning")


if __name__ == "__main__":
    main(sys.argv[1:])
