"""Run the genuniqueid gateway: python -m genuniqueid"""

import logging

import uvicorn

from genuniqueid.config import load_config

logging.basicConfig(level=logging.INFO)

config = load_config()
uvicorn.run("genuniqueid.app:create_app", host=config.host, port=config.port, factory=True)
