from .connector import create_redis_pool, redis_client_source
from .logger import JsonFormatter, setup_logging, setup_logging_from_settings
