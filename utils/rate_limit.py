from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Storage and enablement are read from app.config (RATELIMIT_*) in init_app
limiter = Limiter(key_func=get_remote_address)
