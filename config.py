import os


def _optional_int(name):
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return None
    return int(value)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///mazewalk.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Supported maze side lengths (inclusive)
    MIN_GRID_SIZE = int(os.environ.get('MIN_GRID_SIZE', '3'))
    MAX_GRID_SIZE = int(os.environ.get('MAX_GRID_SIZE', '50'))
    # Obstacle target is ceil(n^2 / OBSTACLE_DIVISOR), clamped to the interior
    # minus OBSTACLE_SAFETY_RATIO of it
    OBSTACLE_DIVISOR = float(os.environ.get('OBSTACLE_DIVISOR', '0.33'))
    OBSTACLE_SAFETY_RATIO = float(os.environ.get('OBSTACLE_SAFETY_RATIO', '0.5'))
    # Optional: fixed seed for reproducible mazes. Unset uses the system CSPRNG.
    MAZE_RNG_SEED = _optional_int('MAZE_RNG_SEED')
    # Comma separated list of allowed browser origins
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
