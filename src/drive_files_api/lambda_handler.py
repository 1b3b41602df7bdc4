"""Lambda handler for the Drive Files API using Mangum."""
from mangum import Mangum

from drive_files_api.config.settings import load_settings
from drive_files_api.main import configure_logging, create_app

# A missing OAuth client fails the cold start rather than each invocation
settings = load_settings()
configure_logging(settings.log_level)
app = create_app(settings)

handler = Mangum(app, lifespan="off")

lambda_handler = handler
