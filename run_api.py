#!/usr/bin/env python3
"""
Script to run the Bookshelf API server.
"""

import uvicorn

from api.config import config
from utilities.config import config as shelf_config
from utilities.logger import setup_logging

BANNER = r"""
  ____              _        _          _  __
 | __ )  ___   ___ | | _____| |__   ___| |/ _|
 |  _ \ / _ \ / _ \| |/ / __| '_ \ / _ \ | |_
 | |_) | (_) | (_) |   <\__ \ | | |  __/ |  _|
 |____/ \___/ \___/|_|\_\___/_| |_|\___|_|_|
"""


def main():
    """Run the API server."""
    setup_logging(
        log_level=shelf_config.log_level,
        log_format=shelf_config.log_format,
        log_file=shelf_config.get_log_file_path(),
        debug=shelf_config.debug
    )

    print(BANNER)
    print(f"📡 Server waiting on {config.get_base_url()} ...")
    print(f"🌐 Debug: {config.debug}")
    print("=" * 50)

    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    main()
