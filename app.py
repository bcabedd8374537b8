import os

from liff_backend import create_app
from liff_backend.config import Config

# Raises ConfigurationError (and stops the process) when CHANNEL_ACCESS_TOKEN is missing
app = create_app(Config)


if __name__ == '__main__':
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', 3000))
    app.logger.info('Health check: http://localhost:%s/', port)
    app.run(host=host, port=port, debug=app.config['DEBUG'])
