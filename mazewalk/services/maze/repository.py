import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from mazewalk import db
from mazewalk.models import Match, Player
from .errors import PersistenceFailure

logger = logging.getLogger(__name__)


class MatchRepository:
    """Stores matches (and their owning players) through Flask-SQLAlchemy.

    Requires an application context. Lookups return ``None`` when nothing
    matches; write failures roll the session back before raising.
    """

    def create_match(self, match: Match, player_name: str, player_id=None) -> Match:
        try:
            player = self._resolve_player(player_name, player_id, match.created_at)
            match.player = player
            db.session.add(match)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.error(f"[match-create] failed for player={player_name!r}", exc_info=True)
            raise PersistenceFailure(f'Failed to create match for {player_name}') from exc
        logger.info(f"[match-create] match={match.id} player={match.player_id} name={player.name!r} n={match.grid_size}")
        return match

    def _resolve_player(self, player_name, player_id, now):
        # An existing id wins, then an existing name, then a new player
        player = None
        if player_id:
            player = db.session.get(Player, player_id)
            if player is None:
                logger.info(f"[player-resolve] unknown player id={player_id}, falling back to name")
        if player is None:
            player = Player.query.filter_by(name=player_name).first()
        if player is None:
            player = Player(name=player_name, created_at=now, updated_at=now)
            db.session.add(player)
        return player

    def get_match_by_id(self, match_id):
        match = db.session.get(Match, match_id)
        if match is None:
            logger.debug(f"[match-get] match={match_id} not found")
        return match

    def get_match_by_name(self, player_name):
        return (
            Match.query.join(Player)
            .filter(Player.name == player_name)
            .order_by(Match.created_at.desc())
            .first()
        )

    def get_latest_match_for_player(self, player_id):
        return (
            Match.query.filter_by(player_id=player_id)
            .order_by(Match.created_at.desc())
            .first()
        )

    def update_match(self, match: Match):
        """Write back a loaded match.

        Returns ``None`` when the row was deleted or its version moved since
        it was loaded; the session is rolled back so nothing is half applied.
        """
        match_id = match.id
        try:
            db.session.add(match)
            db.session.commit()
        except StaleDataError:
            db.session.rollback()
            logger.warning(f"[match-update] match={match_id} vanished or changed concurrently")
            return None
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.error(f"[match-update] match={match_id} failed", exc_info=True)
            raise PersistenceFailure(f'Failed to update match {match_id}') from exc
        return match

    def list_all_matches(self):
        return Match.query.order_by(Match.created_at).all()
