from flask import Flask, g

from config import Config
from extensions import limiter
from routes.catalog import catalog_bp
from routes.pix_payments import pix_payments_bp
from routes.killswitch import killswitch_bp
from audit.request_context import init_request_id, REQUEST_ID_HEADER

app = Flask(__name__)
app.config.from_object(Config)

# MIDDLEWARES (OBSERVABILITY)
# Initialize request correlation ID at the beginning of each request
@app.before_request
def _before_request():
    init_request_id()

# Propagate request_id back to the caller for cross-service tracing
@app.after_request
def _after_request(response):
    response.headers[REQUEST_ID_HEADER] = g.request_id
    return response

# INIT EXTENSIONS
limiter.init_app(app)

# REGISTER BLUEPRINTS
app.register_blueprint(catalog_bp)
app.register_blueprint(pix_payments_bp)
app.register_blueprint(killswitch_bp)

# ENTRYPOINT
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
