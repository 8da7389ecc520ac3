from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from wordgroups.errors import register_error_handlers
    register_error_handlers(flask_app)

    # Import and register blueprints here
    from wordgroups.main import main
    flask_app.register_blueprint(main)

    from wordgroups.api.groups import groups
    from wordgroups.api.puzzles import puzzles
    flask_app.register_blueprint(groups, url_prefix='/api/groups')
    flask_app.register_blueprint(puzzles, url_prefix='/api/groups')

    from wordgroups.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Flask-Login member loader; the session cookie carries only the member id
    from wordgroups.models import Member
    from wordgroups.errors import Unauthenticated

    @login_manager.user_loader
    def load_member(member_id):
        try:
            return db.session.get(Member, int(member_id))
        except (TypeError, ValueError):
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthenticated()

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database with a demo group."""
        from wordgroups.services.groups import create_group, join_group
        from wordgroups.services.puzzles.catalog import create_puzzle
        from wordgroups.schemas import PuzzleCreate
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            group, alice = create_group('Demo Group', 'Alice')
            join_group(group.code, 'Bob')
            create_puzzle(alice, PuzzleCreate.model_validate({
                'difficulty': 'easy',
                'categories': [
                    {'name': 'Fruit', 'color': 'yellow', 'words': ['Apple', 'Banana', 'Cherry', 'Grape']},
                    {'name': 'Planets', 'color': 'green', 'words': ['Mars', 'Venus', 'Saturn', 'Jupiter']},
                    {'name': 'Card games', 'color': 'blue', 'words': ['Poker', 'Bridge', 'Snap', 'Rummy']},
                    {'name': 'Chess pieces', 'color': 'purple', 'words': ['King', 'Queen', 'Rook', 'Bishop']},
                ],
            }))
            print(f'Database has been reset and seeded! Join code: {group.code}')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
