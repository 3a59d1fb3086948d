from __future__ import annotations

import uvicorn

from mhi_chatbot.app.api.app import create_app
from mhi_chatbot.core.config import load_app_config, load_dotenv_file
from mhi_chatbot.core.logs import configure_logging

load_dotenv_file()
config = load_app_config()
configure_logging(config.log_level)

app = create_app(config)


if __name__ == "__main__":
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
