"""WSGI entry point for production deployment."""
import os
from dotenv import load_dotenv
from brigade_attendance import create_app

load_dotenv()

app = create_app(os.getenv('FLASK_ENV', 'production'))
