"""
Seed and unseed known shows through a running catalog API.

Seeds are posted as import snapshots so running a seed twice leaves the
catalog unchanged. Large shows are sent one season at a time.
"""

from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from .client import CatalogClient
from .config import Config
from .seed_data import SEEDS, EpisodeSeed, ShowSeed
from .utils import format_number, setup_logger

# Shows with more episodes than this are imported season by season
CHUNK_EPISODE_THRESHOLD = 100


def build_snapshot(seed: ShowSeed, seasons: Optional[Iterable[int]] = None) -> dict:
    """
    Build an import snapshot for a seed (or a subset of its seasons).

    Ids in the snapshot are local to it; the importer remaps them.
    """
    wanted = set(seed.seasons) if seasons is None else set(seasons)

    snapshot: Dict[str, list] = {
        "shows": [{"id": 1, "title": seed.title, "year": seed.year, "description": seed.description}],
        "seasons": [],
        "actors": [],
        "characters": [],
        "episodes": [],
        "episode_characters": [],
    }

    season_ids = {}
    for number in sorted(wanted):
        season_ids[number] = len(season_ids) + 1
        snapshot["seasons"].append({
            "id": season_ids[number],
            "show_id": 1,
            "season_number": number,
            "year": seed.seasons[number],
        })

    for index, (name, actor) in enumerate(seed.cast.items(), start=1):
        snapshot["characters"].append({"id": index, "show_id": 1, "name": name, "actor_name": actor})

    episodes: List[EpisodeSeed] = [e for e in seed.episodes if e.season in wanted]
    for index, episode in enumerate(episodes, start=1):
        snapshot["episodes"].append({
            "id": index,
            "season_id": season_ids[episode.season],
            "title": episode.title,
            "air_date": episode.air_date,
            "description": episode.description,
        })
        for character, actor in episode.characters:
            link = {"episode_id": index, "character_name": character}
            if actor is not None:
                link["actor_name"] = actor
            snapshot["episode_characters"].append(link)

    return snapshot


def snapshot_chunks(seed: ShowSeed) -> List[dict]:
    if len(seed.episodes) <= CHUNK_EPISODE_THRESHOLD:
        return [build_snapshot(seed)]
    return [build_snapshot(seed, [number]) for number in sorted(seed.seasons)]


class Seeder:
    """Applies seed datasets against the API."""

    def __init__(self, client: CatalogClient, config: Config):
        self.client = client
        self.config = config
        self.logger = setup_logger("seeding", config.log_dir)

    @staticmethod
    def list_seeds() -> List[str]:
        return list(SEEDS)

    @staticmethod
    def load(name: str) -> ShowSeed:
        try:
            return SEEDS[name]()
        except KeyError:
            raise ValueError(
                f"Unknown seed '{name}'. Available: {', '.join(SEEDS)}"
            ) from None

    def seed(self, name: str) -> dict:
        """
        Seed one show and return the merged import counts.

        Raises:
            ValueError: Unknown seed name
            CatalogClientError: API failure after retries
        """
        show = self.load(name)
        self.client.init_database()

        chunks = snapshot_chunks(show)
        totals: Dict[str, Dict[str, int]] = {}
        failures: List[dict] = []

        progress = tqdm(chunks, desc=f"Seeding {show.title}", unit="chunk", disable=len(chunks) == 1)
        for chunk in progress:
            report = self.client.import_snapshot(chunk)
            for section, counts in report.get("counts", {}).items():
                merged = totals.setdefault(section, {})
                for outcome, value in counts.items():
                    merged[outcome] = merged.get(outcome, 0) + value
            failures.extend(report.get("failures", []))

        created = sum(counts.get("created", 0) for counts in totals.values())
        self.logger.info(
            f"Seeded {show.title} ({format_number(len(show.episodes))} episodes, "
            f"{format_number(created)} records created, {len(failures)} failures)"
        )
        for failure in failures:
            self.logger.warning(f"Seed failure for {show.title}: {failure}")

        return {
            "seed": name,
            "show": show.title,
            "status": "completed_with_errors" if failures else "completed",
            "counts": totals,
            "failures": failures,
        }

    def unseed(self, name: str) -> dict:
        """
        Remove a seeded show, then any of its actors left without characters.

        Returns:
            Dict with removed show id (or None) and deleted actor names
        """
        show = self.load(name)
        existing = self.client.find_show(show.title, show.year)
        if existing is None:
            self.logger.info(f"{show.title} ({show.year}) not found, nothing to unseed")
            return {"seed": name, "show_id": None, "deleted_actors": []}

        actor_names = {
            character["actor_name"]
            for character in self.client.list_show_characters(existing["id"])
            if character.get("actor_name")
        }
        self.client.delete_show(existing["id"])

        deleted_actors = []
        for actor_name in sorted(actor_names):
            actor = self.client.find_actor(actor_name)
            if actor is None:
                continue
            if self.client.list_actor_characters(actor["id"]):
                continue
            if self.client.delete_actor(actor["id"]):
                deleted_actors.append(actor_name)

        self.logger.info(
            f"Unseeded {show.title}: removed show {existing['id']}, "
            f"{len(deleted_actors)} orphaned actors"
        )
        return {"seed": name, "show_id": existing["id"], "deleted_actors": deleted_actors}
