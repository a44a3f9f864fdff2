"""
Episode to character links.

Linking resolves (or creates) the character within the episode's show and
adds the join row only when it is missing, so repeated links are no-ops.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection

from .database import DatabaseManager
from .errors import NotFoundError, ValidationError
from .upsert import ABSENT, UpsertEngine
from .utils import setup_logger


@dataclass
class LinkResult:
    """Outcome of linking a character to an episode."""

    episode_id: int
    character_id: int
    character_name: str
    actor_id: Optional[int]
    actor_name: Optional[str]
    created: bool

    def to_dict(self) -> dict:
        return asdict(self)


class AssociationManager:
    """Maintains episode_characters rows without disturbing unrelated links."""

    def __init__(self, db: DatabaseManager, upserts: Optional[UpsertEngine] = None):
        self.db = db
        self.upserts = upserts or UpsertEngine(db)
        self.logger = setup_logger("associations", db.config.log_dir)

    def link_character_to_episode(
        self,
        episode_id: int,
        character_name: Optional[str] = None,
        actor_name: Any = ABSENT,
        character_id: Optional[int] = None,
        actor_id: Any = ABSENT,
        conn: Optional[Connection] = None,
    ) -> LinkResult:
        """
        Link a character to an episode.

        The character is resolved by id, or by name within the episode's
        show (created if missing). actor_name / actor_id are applied only
        when supplied; leaving them out keeps the character's current actor.

        Raises:
            NotFoundError: Unknown episode or character id
            ValidationError: Neither or both of character_id / character_name,
                or a character that belongs to another show
        """
        if conn is None:
            return self.db.run_in_transaction(
                lambda c: self.link_character_to_episode(
                    episode_id, character_name, actor_name, character_id, actor_id, c
                )
            )

        if (character_id is None) == (character_name is None):
            raise ValidationError("Provide exactly one of character_id or character_name")

        episode = conn.execute(
            text(
                "SELECT e.id, s.show_id FROM episodes e "
                "JOIN seasons s ON s.id = e.season_id WHERE e.id = :id"
            ),
            {"id": episode_id},
        ).mappings().first()
        if not episode:
            raise NotFoundError("Episode", episode_id)
        show_id = episode["show_id"]

        actor_payload = {}
        if actor_name is not ABSENT:
            actor_payload["actor_name"] = actor_name
        if actor_id is not ABSENT:
            actor_payload["actor_id"] = actor_id

        if character_id is not None:
            owner = conn.execute(
                text("SELECT show_id FROM characters WHERE id = :id"), {"id": character_id}
            ).scalar()
            if owner is None:
                raise NotFoundError("Character", character_id)
            if owner != show_id:
                raise ValidationError(
                    "Character does not belong to this show",
                    details={"character_id": character_id, "show_id": show_id},
                )
            if actor_payload:
                self.upserts.update("character", character_id, actor_payload, conn)
        else:
            character_id = self.upserts.upsert(
                "character",
                None,
                {"show_id": show_id, "name": character_name, **actor_payload},
                conn,
            ).id

        existing = conn.execute(
            text(
                "SELECT 1 FROM episode_characters "
                "WHERE episode_id = :episode_id AND character_id = :character_id"
            ),
            {"episode_id": episode_id, "character_id": character_id},
        ).first()
        if not existing:
            conn.execute(
                text(
                    "INSERT INTO episode_characters (episode_id, character_id) "
                    "VALUES (:episode_id, :character_id)"
                ),
                {"episode_id": episode_id, "character_id": character_id},
            )
            self.logger.debug(f"Linked character {character_id} to episode {episode_id}")

        character = conn.execute(
            text(
                "SELECT c.id, c.name, c.actor_id, a.name AS actor_name FROM characters c "
                "LEFT JOIN actors a ON a.id = c.actor_id WHERE c.id = :id"
            ),
            {"id": character_id},
        ).mappings().first()
        return LinkResult(
            episode_id=episode_id,
            character_id=character["id"],
            character_name=character["name"],
            actor_id=character["actor_id"],
            actor_name=character["actor_name"],
            created=not existing,
        )

    def unlink_character_from_episode(self, episode_id: int, character_id: int) -> None:
        """Remove one link; NotFoundError when the episode or link is missing."""
        def operation(conn: Connection) -> None:
            found = conn.execute(
                text("SELECT 1 FROM episodes WHERE id = :id"), {"id": episode_id}
            ).first()
            if not found:
                raise NotFoundError("Episode", episode_id)
            result = conn.execute(
                text(
                    "DELETE FROM episode_characters "
                    "WHERE episode_id = :episode_id AND character_id = :character_id"
                ),
                {"episode_id": episode_id, "character_id": character_id},
            )
            if result.rowcount == 0:
                raise NotFoundError("Episode character link", f"{episode_id}/{character_id}")

        self.db.run_in_transaction(operation)
        self.logger.info(f"Unlinked character {character_id} from episode {episode_id}")
