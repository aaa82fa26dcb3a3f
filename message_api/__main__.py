from __future__ import annotations

import logging

import uvicorn

from message_api.core.config import HOST, PORT
from message_api.main import app


def main() -> None:
    logging.getLogger("message_api").info(f"Server running at http://localhost:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
