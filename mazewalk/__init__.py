from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def _origins(value):
    if isinstance(value, str):
        return [origin.strip() for origin in value.split(',') if origin.strip()]
    return list(value or [])


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _origins(flask_app.config.get('CORS_ORIGINS'))
    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One shared engine per app; it holds no per-match state
    from mazewalk.services.maze.engine import MatchEngine
    from mazewalk.services.maze.repository import MatchRepository
    flask_app.extensions['maze_engine'] = MatchEngine.from_config(flask_app.config, MatchRepository())

    from mazewalk.routes import main
    flask_app.register_blueprint(main)

    from mazewalk.api.maze import maze
    # Mount maze routes under /api to match the frontend API client
    flask_app.register_blueprint(maze, url_prefix='/api')

    from mazewalk.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates every table."""
        import mazewalk.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
        click.echo('Database has been reset!')

    @click.command('list-matches')
    def list_matches_command():
        """Prints one line per stored match."""
        with flask_app.app_context():
            matches = flask_app.extensions['maze_engine'].list_matches()
            for m in matches:
                state = 'finished' if m.finished else 'in progress'
                click.echo(
                    f"{m.id} {m.player_name} {m.grid_size}x{m.grid_size} "
                    f"at ({m.position_x}, {m.position_y}) {state} {m.elapsed_seconds:.1f}s"
                )
            if not matches:
                click.echo('No matches yet.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(list_matches_command)

    return flask_app
