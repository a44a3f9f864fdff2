"""
Relational schema for the catalog.

Tables are declared with SQLAlchemy Core so the same definitions create
the schema on MySQL (production) and SQLite (tests).
"""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)

metadata = MetaData()

_mysql = {"mysql_engine": "InnoDB", "mysql_charset": "utf8mb4"}

actors = Table(
    "actors",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("name", name="uq_actor_name"),
    **_mysql,
)

shows = Table(
    "shows",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("year", Integer),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("title", "year", name="uq_show_title_year"),
    **_mysql,
)

seasons = Table(
    "seasons",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("show_id", Integer, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("season_number", Integer, nullable=False),
    Column("year", Integer),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("show_id", "season_number", name="uq_season_per_show"),
    **_mysql,
)

episodes = Table(
    "episodes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("season_id", Integer, ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("air_date", Date),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("season_id", "title", name="uq_episode_per_season"),
    **_mysql,
)

characters = Table(
    "characters",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("show_id", Integer, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("actor_id", Integer, ForeignKey("actors.id", ondelete="SET NULL"), nullable=True, index=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("show_id", "name", name="uq_character_per_show"),
    **_mysql,
)

episode_characters = Table(
    "episode_characters",
    metadata,
    Column("episode_id", Integer, ForeignKey("episodes.id", ondelete="CASCADE"), primary_key=True),
    Column("character_id", Integer, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    **_mysql,
)

# Creation order; drop in reverse
TABLE_NAMES = [table.name for table in metadata.sorted_tables]
