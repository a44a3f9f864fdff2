"""
Episode/character link tests.

Linking must be idempotent and must never change a character's actor
unless asked to.
"""

import pytest

from conftest import find_character, find_show_id
from tvcatalog.errors import NotFoundError, ValidationError


@pytest.fixture
def premiere(farscape_db):
    episodes, _ = farscape_db.list_episodes(show_id=find_show_id(farscape_db, "Farscape"), season_number=1)
    return next(e for e in episodes if e["title"] == "S1E1")


class TestLinkFlow:
    """Flow 1: Linking characters to an episode"""

    def test_link_new_character_by_name(self, associations, farscape_db, premiere):
        """An unknown name creates the character in the episode's show."""
        result = associations.link_character_to_episode(premiere["id"], character_name="Rygel", actor_name="Jonathan Hardy")

        assert result.created
        assert result.character_name == "Rygel"
        assert result.actor_name == "Jonathan Hardy"
        character = farscape_db.get_character(result.character_id)
        assert character["show_id"] == premiere["show_id"]

    def test_link_twice_is_noop(self, associations, farscape_db, premiere):
        first = associations.link_character_to_episode(premiere["id"], character_name="Chiana")
        second = associations.link_character_to_episode(premiere["id"], character_name="Chiana")

        assert first.created
        assert not second.created
        assert second.character_id == first.character_id
        links, total = farscape_db.list_episode_characters(premiere["id"])
        assert [c["name"] for c in links].count("Chiana") == 1

    def test_existing_link_reports_not_created(self, associations, premiere):
        """Crichton is already linked to S1E1 by the seed."""
        result = associations.link_character_to_episode(premiere["id"], character_name="John Crichton")

        assert not result.created

    def test_link_by_id(self, associations, farscape_db, premiere):
        chiana = find_character(farscape_db, premiere["show_id"], "Chiana")
        result = associations.link_character_to_episode(premiere["id"], character_id=chiana["id"])

        assert result.created
        assert result.character_name == "Chiana"


class TestActorPreservation:
    """Flow 2: Links that omit the actor keep the existing one"""

    def test_link_by_name_keeps_actor(self, associations, farscape_db, premiere):
        result = associations.link_character_to_episode(premiere["id"], character_name="Aeryn Sun")

        assert result.actor_name == "Claudia Black"
        aeryn = find_character(farscape_db, premiere["show_id"], "Aeryn Sun")
        assert aeryn["actor_name"] == "Claudia Black"

    def test_link_with_actor_updates_actor(self, associations, farscape_db, premiere):
        result = associations.link_character_to_episode(
            premiere["id"], character_name="Aeryn Sun", actor_name="Claudia Black-Smith"
        )

        assert result.actor_name == "Claudia Black-Smith"

    def test_link_by_id_with_null_actor_clears(self, associations, farscape_db, premiere):
        aeryn = find_character(farscape_db, premiere["show_id"], "Aeryn Sun")
        result = associations.link_character_to_episode(premiere["id"], character_id=aeryn["id"], actor_name=None)

        assert result.actor_id is None
        assert farscape_db.get_character(aeryn["id"])["actor_id"] is None

    def test_linking_leaves_other_links_alone(self, associations, farscape_db, premiere):
        _, before = farscape_db.list_episode_characters(premiere["id"])
        associations.link_character_to_episode(premiere["id"], character_name="Pilot")
        _, after = farscape_db.list_episode_characters(premiere["id"])

        assert after == before + 1


class TestLinkErrors:
    """Flow 3: Invalid link requests"""

    def test_unknown_episode(self, associations, farscape_db):
        with pytest.raises(NotFoundError):
            associations.link_character_to_episode(9999, character_name="Chiana")

    def test_neither_id_nor_name(self, associations, premiere):
        with pytest.raises(ValidationError):
            associations.link_character_to_episode(premiere["id"])

    def test_both_id_and_name(self, associations, farscape_db, premiere):
        chiana = find_character(farscape_db, premiere["show_id"], "Chiana")
        with pytest.raises(ValidationError):
            associations.link_character_to_episode(premiere["id"], character_name="Chiana", character_id=chiana["id"])

    def test_character_from_other_show(self, associations, upserts, farscape_db, premiere):
        other_show = upserts.create("show", {"title": "Lexx", "year": 1997})
        stanley = upserts.create("character", {"show_id": other_show, "name": "Stanley Tweedle"})

        with pytest.raises(ValidationError):
            associations.link_character_to_episode(premiere["id"], character_id=stanley)

    def test_unknown_character_id(self, associations, premiere):
        with pytest.raises(NotFoundError):
            associations.link_character_to_episode(premiere["id"], character_id=9999)


class TestUnlinkFlow:
    """Flow 4: Removing a character from an episode"""

    def test_unlink(self, associations, farscape_db, premiere):
        crichton = find_character(farscape_db, premiere["show_id"], "John Crichton")
        associations.unlink_character_from_episode(premiere["id"], crichton["id"])

        links, _ = farscape_db.list_episode_characters(premiere["id"])
        assert "John Crichton" not in [c["name"] for c in links]
        # The character itself is kept
        assert farscape_db.get_character(crichton["id"]) is not None

    def test_unlink_missing_link(self, associations, farscape_db, premiere):
        chiana = find_character(farscape_db, premiere["show_id"], "Chiana")
        with pytest.raises(NotFoundError):
            associations.unlink_character_from_episode(premiere["id"], chiana["id"])

    def test_unlink_unknown_episode(self, associations):
        with pytest.raises(NotFoundError):
            associations.unlink_character_from_episode(9999, 1)
