import logging
import os

# load envs
from dotenv import load_dotenv
load_dotenv()

from server import create_app


PORT = int(os.getenv("PORT", 5000))
HOST = os.getenv("HOST", None)
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format="[%(levelname)s] %(message)s"
)

app = create_app()
app.run(debug=DEBUG, port=PORT, host=HOST)
