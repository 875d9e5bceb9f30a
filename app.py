# app.py
from flask import Flask, jsonify, request, g, current_app
from flask_cors import CORS
from routes.bible import bible_bp
from config import Config
import os
import logging
import time
import sys
from werkzeug.middleware.proxy_fix import ProxyFix

# Configure logging to output to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)
app.config.from_object(Config)

# Use ProxyFix to handle proxy headers properly (important for Railway)
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

app.json.sort_keys = False  # Preserve order of keys in JSON responses
app.json.compact = True
app.config['CORS_HEADERS'] = 'Content-Type'
app.config['CORS_SUPPORTS_CREDENTIALS'] = True
app.config['CORS_EXPOSE_HEADERS'] = ['Content-Type', 'Authorization']

CORS(app, resources={
    r"/api/*": {
        "origins": "*",
        "methods": ["GET", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "expose_headers": ["Content-Type", "Authorization"],
        "supports_credentials": True
    }
})

# Ensure URLs with or without trailing slashes are handled the same way
app.url_map.strict_slashes = False

if not app.config['ESV_API_KEY']:
    logger.warning("ESV_API_KEY is not set; chapter requests will return 503")

app.register_blueprint(bible_bp, url_prefix='/api/bible')

@app.before_request
def before_request():
    g.start_time = time.time()

@app.after_request
def after_request(response):
    duration = time.time() - g.get('start_time', time.time())
    logger.info(f"Request to {request.path} took {duration:.2f} seconds")
    return response

@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint that also reports whether the ESV key is configured"""
    return jsonify({
        'status': 'healthy',
        'esv': 'configured' if current_app.config.get('ESV_API_KEY') else 'missing',
        'timestamp': time.time()
    })

if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    app.run(debug=True, port=port)
