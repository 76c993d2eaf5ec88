"""服务入口：解析命令行参数并启动 uvicorn。"""

import argparse

import uvicorn

from chat_memory.api.app import create_app
from chat_memory.config.settings import settings
from chat_memory.infrastructure.logging.logger import logger


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat Memory Service")
    parser.add_argument("--host", type=str, default=None, help="Bind host (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (overrides config)")
    args = parser.parse_args()

    host = args.host or settings.host
    port = args.port or settings.port

    logger.info("Starting server", extra={"extra": {
        "host": host,
        "port": port,
        "provider": settings.default_provider,
        "storage_backend": settings.storage_backend,
    }})
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
