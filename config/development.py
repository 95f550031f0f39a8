"""Development configuration."""
import os

from .base import Config

class DevelopmentConfig(Config):
    """Development configuration class."""
    ENV_NAME = 'development'
    DEBUG = True
    TESTING = False
    
    # Local SQLite file unless a database is provided
    SQLALCHEMY_DATABASE_URI = os.environ.get('DEV_DATABASE_URL') or \
        'sqlite:///brigade_attendance_dev.db'
    SQLALCHEMY_ECHO = os.environ.get('SQLALCHEMY_ECHO', '').lower() == 'true'
    
    LOG_LEVEL = 'DEBUG'
