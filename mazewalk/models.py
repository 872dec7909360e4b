from mazewalk import db
from mazewalk.services.maze.grid import Position
from datetime import datetime, timezone
import json
import uuid


def generate_id():
    return str(uuid.uuid4())


def utcnow():
    """Naive UTC timestamp; SQLite drops tzinfo so everything is stored naive."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value):
    return value.isoformat() + 'Z' if value else None


class Player(db.Model):
    __tablename__ = 'players'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    matches = db.relationship('Match', back_populates='player', order_by='Match.created_at')

    def to_dict(self):
        return {
            'playerId': self.id,
            'name': self.name,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }


class Match(db.Model):
    __tablename__ = 'matches'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    player_id = db.Column(db.String(36), db.ForeignKey('players.id'), nullable=False, index=True)
    maze = db.Column(db.Text, nullable=False)  # JSON-encoded list of rows
    grid_size = db.Column(db.Integer, nullable=False)
    position_x = db.Column(db.Integer, nullable=False, default=0)
    position_y = db.Column(db.Integer, nullable=False, default=0)
    finished = db.Column(db.Boolean, nullable=False, default=False)
    elapsed_seconds = db.Column(db.Float, nullable=False, default=0.0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    # Row stamp checked on every UPDATE; a mismatch raises StaleDataError
    version = db.Column(db.Integer, nullable=False)
    player = db.relationship('Player', back_populates='matches')

    __mapper_args__ = {'version_id_col': version}

    @property
    def grid(self):
        return json.loads(self.maze) if self.maze else []

    @grid.setter
    def grid(self, value):
        self.maze = json.dumps([[int(cell) for cell in row] for row in value])
        self.grid_size = len(value)

    @property
    def position(self):
        return Position(self.position_x, self.position_y)

    @position.setter
    def position(self, value):
        self.position_x, self.position_y = int(value[0]), int(value[1])

    @property
    def player_name(self):
        return self.player.name if self.player else None

    def to_dict(self, include_grid=True):
        data = {
            'matchId': self.id,
            'playerId': self.player_id,
            'playerName': self.player_name,
            'currentPosition': {'x': self.position_x, 'y': self.position_y},
            'finished': bool(self.finished),
            'elapsedSeconds': float(self.elapsed_seconds or 0.0),
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }
        if include_grid:
            data['grid'] = self.grid
        return data
