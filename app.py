"""Development entrypoint delegating to the application package."""

import atexit

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from workvista.config import AppConfig
from workvista.database import close_mongo_connection
from workvista.main import create_app

config = AppConfig.from_env()
app = create_app(config)
atexit.register(close_mongo_connection)


if __name__ == "__main__":
    app.logger.info("WorkVista Server listening on port %s", config.port)
    app.run(host="0.0.0.0", port=config.port, debug=True)
