# dispatcher/config.py
"""Configuration settings for the dispatcher"""
import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Delivery settings
DELIVERY_DURATION_MINUTES = int(os.getenv('DISPATCH_DELIVERY_MINUTES', '30'))
DELIVERY_DURATION = timedelta(minutes=DELIVERY_DURATION_MINUTES)

# File paths
DATA_DIR = os.getenv('DISPATCH_DATA_DIR', './data')
DRIVERS_FILE = os.getenv('DISPATCH_DRIVERS_FILE', os.path.join(DATA_DIR, 'drivers.json'))

# Roster used when no drivers file is present
DEFAULT_DRIVER_NAMES = ['John', 'Sarah', 'Mike', 'Emma', 'David']

# Identifier prefixes
ORDER_ID_PREFIX = 'ORD'
DRIVER_ID_PREFIX = 'DRV'

# Summary settings
COMPLETED_PREVIEW_LIMIT = int(os.getenv('DISPATCH_COMPLETED_PREVIEW', '5'))

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text').lower()

# HTTP service
API_HOST = os.getenv('API_HOST', '0.0.0.0')
API_PORT = int(os.getenv('API_PORT', '8000'))
API_BASE_URL = os.getenv('API_BASE_URL', f'http://localhost:{API_PORT}')
