import logging
from pathlib import Path

from flask import Flask

from tasktracker.config import Config
from tasktracker.logging_setup import setup_logging
from tasktracker.main.routes import main
from tasktracker.models import db
from tasktracker.rpc.routes import rpc

logger = logging.getLogger('tasktracker.app')


def create_app(config_object=Config, **overrides):
    app = Flask(__name__, template_folder='tasktracker/templates')
    app.config.from_object(config_object)
    app.config.update(overrides)

    if app.config.get('LOG_CONFIGURE'):
        setup_logging(log_dir=app.config.get('LOG_DIR'), console_level=app.config.get('LOG_LEVEL', 'INFO'))

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        instance = Path(app.instance_path)
        instance.mkdir(parents=True, exist_ok=True)
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{instance / 'tasks.db'}"

    app.register_blueprint(rpc)
    app.register_blueprint(main)

    db.init_app(app)

    with app.app_context():
        db.create_all()

    logger.info('Task tracker ready db=%s', app.config['SQLALCHEMY_DATABASE_URI'])
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(port=app.config['SERVER_PORT'], debug=True)
