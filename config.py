# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv(os.path.join(BASE_DIR, '.env'))

class Config:
    ESV_API_KEY = (os.getenv('ESV_API_KEY') or '').strip()
    ESV_API_URL = os.getenv('ESV_API_URL', 'https://api.esv.org/v3/passage/text/')
    ESV_TIMEOUT_SECONDS = float(os.getenv('ESV_TIMEOUT_SECONDS', 15))
    JWT_SECRET = os.getenv('JWT_SECRET', '')
    JWT_AUDIENCE = os.getenv('JWT_AUDIENCE', 'authenticated')
    MAX_CHAPTER = 200
