import os
from dotenv import load_dotenv

# Load .env from project root
basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
env_path = os.path.join(basedir, '.env')
load_dotenv(env_path)


class Config:
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
    TESTING = False

    # LINE Messaging API (token is mandatory, see create_app)
    CHANNEL_ACCESS_TOKEN = os.environ.get('CHANNEL_ACCESS_TOKEN', '')
    LINE_PUSH_API_URL = os.environ.get('LINE_PUSH_API_URL', 'https://api.line.me/v2/bot/message/push')
    LINE_TIMEOUT_SECONDS = float(os.environ.get('LINE_TIMEOUT_SECONDS', '5'))

    # MongoDB Atlas configuration (optional)
    MONGODB_URI = os.environ.get('MONGODB_URI', '')
    MONGODB_DB = os.environ.get('MONGODB_DB', 'gmf_liff')
    MONGODB_COLLECTION = os.environ.get('MONGODB_COLLECTION', 'inquiries')
    MONGODB_TIMEOUT_MS = int(os.environ.get('MONGODB_TIMEOUT_MS', '5000'))

    # Sentry monitoring (optional)
    SENTRY_DSN = os.environ.get('SENTRY_DSN', '')
    SENTRY_TRACES_SAMPLE_RATE = float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE', '0'))
    SENTRY_ENVIRONMENT = os.environ.get('SENTRY_ENVIRONMENT', 'production')

    # Vendor business timezone used for timestamps and deadline math
    BUSINESS_TIMEZONE = os.environ.get('BUSINESS_TIMEZONE', 'Asia/Bangkok')

    # 5 submissions per 15 minutes per client address
    RATE_LIMIT_MAX = int(os.environ.get('RATE_LIMIT_MAX', '5'))
    RATE_LIMIT_WINDOW_SECONDS = int(os.environ.get('RATE_LIMIT_WINDOW_SECONDS', str(15 * 60)))

    # Number of trusted X-Forwarded-For hops; 0 uses the socket peer address
    PROXY_FIX_X_FOR = int(os.environ.get('PROXY_FIX_X_FOR', '0'))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class ProductionConfig(Config):
    DEBUG = False


class DevelopmentConfig(Config):
    DEBUG = True
    SENTRY_ENVIRONMENT = 'development'


class TestingConfig(Config):
    TESTING = True
    DEBUG = True
    CHANNEL_ACCESS_TOKEN = 'test-channel-token'
    MONGODB_URI = ''
    SENTRY_DSN = ''
    PROXY_FIX_X_FOR = 0
