import logging

import uvicorn

from admin_panel.api.app import create_app
from admin_panel.config import load_config

config = load_config()

logging.basicConfig(level=config.LOG_LEVEL.upper())

app = create_app(config)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.is_local,
        log_level=config.LOG_LEVEL.lower(),
    )
