import os

from dotenv import load_dotenv

load_dotenv(override=False)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database (empty -> sqlite file in the instance folder)
    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Dev server
    SERVER_PORT = int(os.environ.get('SERVER_PORT', 2022))

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    LOG_CONFIGURE = os.environ.get('LOG_CONFIGURE', 'True').lower() == 'true'


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    LOG_CONFIGURE = False
