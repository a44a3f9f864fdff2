"""
Seed datasets for known shows.

Each dataset is a ShowSeed. Episodes list the characters that appear in
them; a character given with an actor sets that actor, a character given
without one keeps whatever actor it already has.
"""

import os
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple

Cast = Tuple[Tuple[str, Optional[str]], ...]


@dataclass
class EpisodeSeed:
    season: int
    title: str
    air_date: Optional[str] = None
    description: Optional[str] = None
    characters: Cast = ()


@dataclass
class ShowSeed:
    key: str
    title: str
    year: int
    description: str
    seasons: Dict[int, int]
    cast: Dict[str, str] = field(default_factory=dict)
    episodes: List[EpisodeSeed] = field(default_factory=list)

    @property
    def actor_names(self) -> List[str]:
        names = list(self.cast.values())
        for episode in self.episodes:
            names.extend(actor for _, actor in episode.characters if actor)
        return sorted(set(names))


def _names(*characters: str) -> Cast:
    return tuple((name, None) for name in characters)


def _episodes(rows: Sequence[Tuple[int, str, str, str]], cast_for_season: Callable[[int], Cast]) -> List[EpisodeSeed]:
    return [
        EpisodeSeed(season=season, air_date=air_date, title=title, description=description,
                    characters=cast_for_season(season))
        for season, air_date, title, description in rows
    ]


def farscape() -> ShowSeed:
    seasons = {1: 1999, 2: 2000, 3: 2001, 4: 2002}
    links = {
        1: _names("John Crichton", "Aeryn Sun", "Ka D'Argo"),
        2: _names("John Crichton", "Aeryn Sun", "Ka D'Argo", "Chiana"),
        3: _names("John Crichton", "Aeryn Sun", "Ka D'Argo", "Chiana"),
        4: _names("John Crichton", "Chiana"),
    }
    episodes = [
        EpisodeSeed(
            season=season,
            title=f"S{season}E{ep}",
            air_date=f"{year}-01-{ep * 7 - 6:02d}",
            description=f"Episode {ep} of season {season}.",
            characters=links[season],
        )
        for season, year in seasons.items()
        for ep in (1, 2, 3)
    ]
    return ShowSeed(
        key="farscape",
        title="Farscape",
        year=1999,
        description="Australian-American science fiction series",
        seasons=seasons,
        cast={
            "John Crichton": "Ben Browder",
            "Aeryn Sun": "Claudia Black",
            "Ka D'Argo": "Anthony Simcoe",
            "Chiana": "Gigi Edgley",
        },
        episodes=episodes,
    )


def the_expanse() -> ShowSeed:
    rows = [
        (1, "2015-12-14", "Dulcinea", "Series premiere."),
        (1, "2015-12-22", "The Big Empty", "Holden's crew fights for survival."),
        (1, "2015-12-29", "Remember the Cant", "The Canterbury's destruction spreads chaos."),
        (1, "2016-01-05", "CQB", "The Rocinante is caught in a deadly battle."),
        (1, "2016-01-12", "Back to the Butcher", "Holden deals with sudden fame."),
        (2, "2017-02-01", "Safe", "Season 2 opener."),
        (2, "2017-02-01", "Doors & Corners", "Season 2 continues."),
        (2, "2017-02-08", "Static", "Holden struggles with Miller's actions."),
        (2, "2017-02-15", "Godspeed", "The Rocinante chases a dangerous threat."),
        (2, "2017-02-22", "Home", "A massive object heads for Earth."),
        (3, "2018-04-11", "Fight or Flight", "Season 3 opener."),
        (3, "2018-04-18", "IFF", "The Rocinante aids a UN ship."),
        (3, "2018-04-25", "Assured Destruction", "Earth considers a doomsday plan."),
        (3, "2018-05-02", "Reload", "The crew resupplies and faces new threats."),
        (3, "2018-05-09", "Triple Point", "Tensions at the Ring escalate."),
        (4, "2019-12-13", "New Terra", "Season 4 opener."),
        (4, "2019-12-13", "Jetsam", "Tensions on Ilus rise."),
        (4, "2019-12-13", "Subduction", "Holden confronts the planet's mysteries."),
        (4, "2019-12-13", "Retrograde", "A rescue mission turns dangerous."),
        (4, "2019-12-13", "Oppressor", "Murtry makes a ruthless move."),
        (5, "2020-12-16", "Exodus", "Season 5 opener."),
        (5, "2020-12-16", "Churn", "Holden pursues a new threat."),
        (5, "2020-12-16", "Mother", "Naomi reaches out to her son."),
        (5, "2020-12-23", "Gaugamela", "Earth and Mars are under attack."),
        (5, "2020-12-30", "Down and Out", "The crew deals with fallout."),
        (6, "2021-12-10", "Strange Dogs", "Season 6 opener."),
        (6, "2021-12-17", "Azure Dragon", "The Rocinante targets a rail-gun platform."),
        (6, "2021-12-24", "Force Projection", "Holden takes a risky shot."),
        (6, "2021-12-31", "Redoubt", "Drummer fights for allies."),
        (6, "2022-01-07", "Why We Fight", "The inner planets unite for war."),
    ]
    crew = _names("James Holden", "Naomi Nagata", "Alex Kamal", "Amos Burton")
    final_season = _names("James Holden", "Naomi Nagata", "Amos Burton")
    return ShowSeed(
        key="the-expanse",
        title="The Expanse",
        year=2015,
        description="American science fiction series",
        seasons={1: 2015, 2: 2017, 3: 2018, 4: 2019, 5: 2020, 6: 2021},
        cast={
            "James Holden": "Steven Strait",
            "Naomi Nagata": "Dominique Tipper",
            "Alex Kamal": "Cas Anvar",
            "Amos Burton": "Wes Chatham",
        },
        episodes=_episodes(rows, lambda season: final_season if season == 6 else crew),
    )


def stargate_universe() -> ShowSeed:
    rows = [
        (1, "2009-10-02", "Air (Part 1)", "Series premiere."),
        (1, "2009-10-09", "Air (Part 2)", "Continuation of the premiere."),
        (1, "2009-10-16", "Air (Part 3)", "The stranded crew searches for water."),
        (1, "2009-10-23", "Darkness", "Power failures threaten the ship."),
        (1, "2009-10-30", "Light", "The crew faces death as the ship heads for a star."),
        (2, "2010-09-28", "Intervention", "Season 2 opener."),
        (2, "2010-10-05", "Aftermath", "Young faces the consequences of command."),
        (2, "2010-10-12", "Awakening", "An encounter with an Ancient seed ship."),
        (2, "2010-10-19", "Pathogen", "Chloe undergoes strange changes."),
        (2, "2010-10-26", "Cloverdale", "Scott lives an alternate reality."),
    ]
    cast = {
        "Dr. Nicholas Rush": "Robert Carlyle",
        "Col. Everett Young": "Louis Ferreira",
        "Eli Wallace": "David Blue",
        "Chloe Armstrong": "Elyse Levesque",
    }
    everyone = _names(*cast)
    return ShowSeed(
        key="stargate-universe",
        title="Stargate Universe",
        year=2009,
        description="Canadian-American military science fiction series",
        seasons={1: 2009, 2: 2010},
        cast=cast,
        episodes=_episodes(rows, lambda season: everyone),
    )


def sapphire_and_steel() -> ShowSeed:
    rows = [
        (1, "1979-07-10", "Escape Through a Crack in Time: Part 1", "Sapphire and Steel answer a plea from siblings whose parents vanish amid a time rupture."),
        (1, "1979-07-12", "Escape Through a Crack in Time: Part 2", "Steel uncovers time fragments stalking the house while Sapphire bonds with the children."),
        (1, "1979-07-17", "Escape Through a Crack in Time: Part 3", "The agents trace the disturbance to nursery rhymes echoing across history."),
        (1, "1979-07-19", "Escape Through a Crack in Time: Part 4", "A soldier torn from the past stalks the home as the rupture widens."),
        (1, "1979-07-24", "Escape Through a Crack in Time: Part 5", "The enemy lures Sapphire into the void, forcing Steel to improvise a rescue."),
        (1, "1979-07-26", "Escape Through a Crack in Time: Part 6", "Silver helps seal the temporal crack before it engulfs the Earth."),
        (2, "1979-07-31", "The Railway Station: Part 1", "At a deserted station, ghosts of 1917 haunt the living and draw the agents in."),
        (2, "1979-08-02", "The Railway Station: Part 2", "Steel confronts a spectral sergeant determined to replay wartime executions."),
        (2, "1979-08-07", "The Railway Station: Part 3", "Sapphire experiences the looped time of a wartime massacre."),
        (2, "1979-08-09", "The Railway Station: Part 4", "A volunteer evacuee reveals the force that feeds on grief."),
        (2, "1979-08-14", "The Railway Station: Part 5", "The investigators prepare a trap using Silver's time-forged equipment."),
        (2, "1979-08-16", "The Railway Station: Part 6", "The entity torments Sapphire with phantoms of the dead."),
        (2, "1979-08-21", "The Railway Station: Part 7", "Steel challenges the faceless officer commanding the time storm."),
        (2, "1979-08-23", "The Railway Station: Part 8", "Sapphire seals the railway rift and grants the spirits peace."),
        (3, "1981-01-06", "The Creature's Revenge: Part 1", "Antique photographs bleed time, drawing the agents to a rural house."),
        (3, "1981-01-07", "The Creature's Revenge: Part 2", "A creature imprisoned on film reaches through the developing trays."),
        (3, "1981-01-13", "The Creature's Revenge: Part 3", "Steel interrogates a survivor trapped within a snapshot."),
        (3, "1981-01-14", "The Creature's Revenge: Part 4", "Sapphire risks entrapment to learn the creature's motives."),
        (3, "1981-01-20", "The Creature's Revenge: Part 5", "Silver fashions a projector snare as time shards attack."),
        (3, "1981-01-21", "The Creature's Revenge: Part 6", "Steel forces the entity back into its film loop to free the victims."),
        (4, "1981-08-05", "The Man Without a Face: Part 1", "A faceless intruder steals people from a tower block in the night."),
        (4, "1981-08-06", "The Man Without a Face: Part 2", "Steel deduces that photographs have become gateways for the thief."),
        (4, "1981-08-11", "The Man Without a Face: Part 3", "Sapphire enters a child's memories to track the image world."),
        (4, "1981-08-12", "The Man Without a Face: Part 4", "Steel journeys into the photographs where the man harvests faces."),
        (4, "1981-08-18", "The Man Without a Face: Part 5", "Silver constructs a mirror prison to hold the entity at bay."),
        (4, "1981-08-19", "The Man Without a Face: Part 6", "The agents bargain to free the captives before reality unravels."),
        (5, "1982-08-11", "Dr McDee Must Die: Part 1", "Guests at a country house reenact a 1930s murder that turns deadly again."),
        (5, "1982-08-12", "Dr McDee Must Die: Part 2", "Sapphire senses time replaying the night of Dr. McDee's death."),
        (5, "1982-08-18", "Dr McDee Must Die: Part 3", "Steel interrogates the hosts as the partygoers become possessed."),
        (5, "1982-08-19", "Dr McDee Must Die: Part 4", "A time storm traps the house in a lethal masquerade."),
        (5, "1982-08-25", "Dr McDee Must Die: Part 5", "The murderer is unmasked but the house refuses to release the victims."),
        (5, "1982-08-26", "Dr McDee Must Die: Part 6", "The agents reset the evening to break the killing loop."),
        (6, "1982-08-31", "The Trap: Part 1", "The agents board a deserted space station after receiving a distress call."),
        (6, "1982-09-01", "The Trap: Part 2", "Steel uncovers a sinister card game that imprisons operatives."),
        (6, "1982-09-07", "The Trap: Part 3", "Sapphire is drawn into the game as the snare hunts for replacements."),
        (6, "1982-09-08", "The Trap: Part 4", "Sapphire and Steel accept exile to save humanity from the trap."),
    ]
    return ShowSeed(
        key="sapphire-and-steel",
        title="Sapphire & Steel",
        year=1979,
        description="ITV science fiction mystery serial",
        seasons={1: 1979, 2: 1979, 3: 1981, 4: 1981, 5: 1982, 6: 1982},
        episodes=_episodes(rows, lambda season: ()),
    )


def _cast(blob: str) -> Cast:
    """Parse "Character=Actor;..." where an actor of N/A is unknown."""
    cast = []
    for entry in blob.split(";"):
        name, _, actor = entry.partition("=")
        cast.append((name.strip(), actor.strip() if actor.strip() not in ("", "N/A") else None))
    return tuple(cast)


def twilight_zone() -> ShowSeed:
    rows = [
        (1, "1959-10-02", "Where Is Everybody?", "An Air Force pilot wanders an eerily deserted town and questions his own sanity.",
         "Mike Ferris=Earl Holliman;Narrator=Rod Serling"),
        (1, "1959-10-09", "One for the Angels", "A kindly pitchman bargains with Death for time to deliver one last great sales pitch.",
         "Lew Bookman=Ed Wynn;Death=Murray Hamilton;Narrator=Rod Serling"),
        (1, "1959-10-16", "Walking Distance", "A stressed executive revisits his hometown only to find himself transported to his childhood past.",
         "Martin Sloan=Gig Young;Narrator=Rod Serling"),
        (1, "1959-11-20", "Time Enough at Last", "A bookish bank clerk survives a nuclear attack and finally has time to read, until fate intervenes.",
         "Henry Bemis=Burgess Meredith;Helen Bemis=Jacqueline deWit;Narrator=Rod Serling"),
        (1, "1960-03-04", "The Monsters Are Due on Maple Street", "Paranoia consumes a suburban block when the power fails and suspicion turns neighbor against neighbor.",
         "Steve Brand=Claude Akins;Charlie Farnsworth=Jack Weston;Narrator=Rod Serling"),
        (1, "1960-06-24", "The Mighty Casey", "A washed-up baseball team signs a robot pitcher whose gentle nature challenges what it means to win.",
         "Mouth McGarry=Jack Warden;Dr. Stillman=Abraham Sofaer;Casey=Robert Sorrells;Narrator=Rod Serling"),
        (2, "1960-09-30", "King Nine Will Not Return", "A bomber pilot is haunted by the desert crash of his squadron after awakening alone at the wreckage.",
         "Captain James Embry=Robert Cummings;Narrator=Rod Serling"),
        (2, "1960-11-11", "Eye of the Beholder", "A woman undergoes repeated surgeries to look \"normal,\" only to face a society with a very different definition of beauty.",
         "Janet Tyler=Donna Douglas;Doctor Bernardi=William D. Gordon;Nurse=Jennifer Howard;Narrator=Rod Serling"),
        (2, "1961-01-06", "The Lateness of the Hour", "An isolated family's android servants become objects of resentment for their daughter.",
         "Jana=Inger Stevens;Dr. Lars Loren=John Hoyt;Inger Loren=Irene Tedrow;Narrator=Rod Serling"),
        (2, "1961-03-31", "A Hundred Yards Over the Rim", "A pioneer searching for medicine for his son stumbles into the future New Mexico desert.",
         "Christian Horn=Cliff Robertson;Paula Horn=Miranda Jones;Narrator=Rod Serling"),
        (2, "1961-05-19", "Will the Real Martian Please Stand Up?", "Stranded bus passengers suspect an alien among them during a snowbound night at a diner.",
         "Ethel McConnell=Jean Willes;Ross=John Hoyt;Kanamit=N/A;Narrator=Rod Serling"),
        (2, "1961-06-02", "The Obsolete Man", "A totalitarian state condemns a librarian, only to have him turn the tables during a televised execution.",
         "Romney Wordsworth=Burgess Meredith;Chancellor=N/A;Narrator=Rod Serling"),
    ]
    return ShowSeed(
        key="twilight-zone",
        title="The Twilight Zone",
        year=1959,
        description="Rod Serling anthology of speculative fiction",
        seasons={1: 1959, 2: 1960},
        episodes=[
            EpisodeSeed(season=season, air_date=air_date, title=title, description=description,
                        characters=_cast(blob))
            for season, air_date, title, description, blob in rows
        ],
    )


DOCTOR_WHO_SEASONS = {
    1: 1963, 2: 1964, 3: 1965, 4: 1966, 5: 1967, 6: 1968, 7: 1970, 8: 1971, 9: 1972,
    10: 1972, 11: 1973, 12: 1974, 13: 1975, 14: 1976, 15: 1977, 16: 1978, 17: 1979,
    18: 1980, 19: 1982, 20: 1983, 21: 1984, 22: 1985, 23: 1986, 24: 1987, 25: 1988, 26: 1989,
}
# Broadcast episodes per classic season
DOCTOR_WHO_EPISODE_COUNTS = {
    1: 42, 2: 39, 3: 45, 4: 43, 5: 40, 6: 44, 7: 25, 8: 25, 9: 26, 10: 26, 11: 26, 12: 20, 13: 26,
    14: 26, 15: 26, 16: 26, 17: 26, 18: 28, 19: 26, 20: 28, 21: 24, 22: 13, 23: 14, 24: 14, 25: 14, 26: 14,
}
DOCTOR_WHO_CAST = {
    "The Doctor (First Doctor)": "William Hartnell",
    "The Doctor (Second Doctor)": "Patrick Troughton",
    "The Doctor (Third Doctor)": "Jon Pertwee",
    "The Doctor (Fourth Doctor)": "Tom Baker",
    "The Doctor (Fifth Doctor)": "Peter Davison",
    "The Doctor (Sixth Doctor)": "Colin Baker",
    "The Doctor (Seventh Doctor)": "Sylvester McCoy",
    "Susan Foreman": "Carole Ann Ford",
    "Ian Chesterton": "William Russell",
    "Barbara Wright": "Jacqueline Hill",
    "Vicki": "Maureen O'Brien",
    "Steven Taylor": "Peter Purves",
    "Ben Jackson": "Michael Craze",
    "Polly": "Anneke Wills",
    "Jamie McCrimmon": "Frazer Hines",
    "Victoria Waterfield": "Deborah Watling",
    "Zoe Heriot": "Wendy Padbury",
    "Liz Shaw": "Caroline John",
    "Sarah Jane Smith": "Elisabeth Sladen",
    "Brigadier Lethbridge-Stewart": "Nicholas Courtney",
    "Harry Sullivan": "Ian Marter",
    "Leela": "Louise Jameson",
    "Romana I": "Mary Tamm",
    "Romana II": "Lalla Ward",
    "Adric": "Matthew Waterhouse",
    "Nyssa": "Sarah Sutton",
    "Tegan Jovanka": "Janet Fielding",
    "Vislor Turlough": "Mark Strickson",
    "Jo Grant": "Katy Manning",
    "Peri Brown": "Nicola Bryant",
    "Mel Bush": "Bonnie Langford",
    "Ace": "Sophie Aldred",
    "K9": "John Leeson",
}


def _doctor_for_season(season: int) -> str:
    for last_season, incarnation in ((4, "First"), (6, "Second"), (11, "Third"), (18, "Fourth"),
                                     (21, "Fifth"), (23, "Sixth")):
        if season <= last_season:
            return f"The Doctor ({incarnation} Doctor)"
    return "The Doctor (Seventh Doctor)"


def _companions_for_season(season: int) -> Tuple[str, ...]:
    companions = {
        (1, 2): ("Susan Foreman", "Ian Chesterton", "Barbara Wright"),
        (3,): ("Vicki", "Steven Taylor"),
        (4,): ("Ben Jackson", "Polly"),
        (5,): ("Jamie McCrimmon", "Victoria Waterfield"),
        (6,): ("Jamie McCrimmon", "Zoe Heriot"),
        (7,): ("Liz Shaw", "Brigadier Lethbridge-Stewart"),
        (8, 9, 10): ("Jo Grant", "Brigadier Lethbridge-Stewart"),
        (11,): ("Sarah Jane Smith", "Brigadier Lethbridge-Stewart"),
        (12, 13): ("Sarah Jane Smith", "Harry Sullivan", "Brigadier Lethbridge-Stewart"),
        (14,): ("Sarah Jane Smith",),
        (15,): ("Leela", "K9"),
        (16,): ("Romana I", "K9"),
        (17, 18): ("Romana II", "K9"),
        (19,): ("Adric", "Nyssa", "Tegan Jovanka"),
        (20,): ("Nyssa", "Tegan Jovanka"),
        (21,): ("Tegan Jovanka", "Vislor Turlough"),
        (22, 23): ("Peri Brown",),
        (24,): ("Mel Bush",),
        (25, 26): ("Ace",),
    }
    for seasons, names in companions.items():
        if season in seasons:
            return names
    return ()


def doctor_who() -> ShowSeed:
    """
    Classic era, seasons 1-26.

    The opening serials of each season are listed by name. The rest of the
    season is filled with numbered placeholders up to its broadcast count,
    each linked to that season's Doctor and regular companions.
    """
    rows = [
        (1, "1963-11-23", "An Unearthly Child", "Series premiere.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (1, "1963-11-30", "The Cave of Skulls", "The TARDIS crew faces Stone Age dangers.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (1, "1963-12-07", "The Forest of Fear", "The travellers strive to escape the tribe.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (1, "1963-12-14", "The Firemaker", "Ian's plan to help the tribe backfires.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (1, "1963-12-21", "The Dead Planet", "The crew explores a seemingly lifeless world.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (2, "1964-10-31", "Planet of Giants", "The crew is accidentally miniaturized.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (2, "1964-11-07", "Dangerous Journey", "The tiny travelers face a deadly insecticide.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (2, "1964-11-14", "Crisis", "The team sabotages the pesticide to save humanity.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (2, "1964-11-21", "World's End", "The Daleks occupy a future Earth.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (2, "1964-11-28", "The Daleks", "The travellers confront Daleks in ruined London.",
         "The Doctor (First Doctor);Susan Foreman;Ian Chesterton;Barbara Wright"),
        (3, "1965-09-11", "Four Hundred Dawns", "The Doctor meets the stranded Drahvins and Rills on a doomed world.",
         "The Doctor (First Doctor);Vicki;Steven Taylor"),
        (3, "1965-09-18", "Trap of Steel", "The Drahvins imprison the Doctor's friends.",
         "The Doctor (First Doctor);Vicki;Steven Taylor"),
        (3, "1965-09-25", "Air Lock", "Steven's escape attempt leads to Rill contact.",
         "The Doctor (First Doctor);Vicki;Steven Taylor"),
        (3, "1965-10-02", "The Exploding Planet", "The travelers race to leave the doomed world.",
         "The Doctor (First Doctor);Vicki;Steven Taylor"),
        (3, "1965-10-09", "Temple of Secrets", "Arriving in ancient Troy, the Doctor is mistaken for a prophet.",
         "The Doctor (First Doctor);Vicki;Steven Taylor"),
        (4, "1966-09-10", "The Smugglers: Part 1", "The TARDIS lands in 17th-century Cornwall amid pirate schemes.",
         "The Doctor (First Doctor);Ben Jackson;Polly"),
        (4, "1966-09-17", "The Smugglers: Part 2", "Captain Pike plots to seize hidden treasure.",
         "The Doctor (First Doctor);Ben Jackson;Polly"),
        (4, "1966-09-24", "The Smugglers: Part 3", "The Doctor seeks the cryptic clues to Avery's gold.",
         "The Doctor (First Doctor);Ben Jackson;Polly"),
        (4, "1966-10-01", "The Smugglers: Part 4", "A storm and betrayal doom the smugglers' plan.",
         "The Doctor (First Doctor);Ben Jackson;Polly"),
        (4, "1966-10-08", "The Tenth Planet: Part 1", "Earth faces invasion from the mysterious Mondas.",
         "The Doctor (First Doctor);Ben Jackson;Polly"),
        (5, "1967-09-02", "The Tomb of the Cybermen: Part 1", "Archaeologists awaken dormant Cybermen on Telos.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Victoria Waterfield"),
        (5, "1967-09-09", "The Tomb of the Cybermen: Part 2", "The expedition explores the chilling tomb.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Victoria Waterfield"),
        (5, "1967-09-16", "The Tomb of the Cybermen: Part 3", "The revived Cybermen reveal their sinister plans.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Victoria Waterfield"),
        (5, "1967-09-23", "The Tomb of the Cybermen: Part 4", "The Doctor traps the Cybermen back in hibernation.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Victoria Waterfield"),
        (5, "1967-09-30", "The Abominable Snowmen: Part 1", "Monks in the Himalayas fear a Yeti menace.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Victoria Waterfield"),
        (6, "1968-08-10", "The Dominators: Part 1", "The Dominators and their Quarks threaten the pacifist planet Dulkis.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Zoe Heriot"),
        (6, "1968-08-17", "The Dominators: Part 2", "The Doctor is forced to aid the invaders' drilling.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Zoe Heriot"),
        (6, "1968-08-24", "The Dominators: Part 3", "Jamie leads resistance against the Quarks.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Zoe Heriot"),
        (6, "1968-08-31", "The Dominators: Part 4", "Zoe devises a way to disable the Quarks.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Zoe Heriot"),
        (6, "1968-09-07", "The Dominators: Part 5", "A volcanic eruption destroys the Dominators' plan.",
         "The Doctor (Second Doctor);Jamie McCrimmon;Zoe Heriot"),
        (7, "1970-01-03", "Spearhead from Space: Part 1", "Autons invade Earth as the Doctor recovers from regeneration.",
         "The Doctor (Third Doctor);Liz Shaw;Brigadier Lethbridge-Stewart"),
        (7, "1970-01-10", "Spearhead from Space: Part 2", "Nestene energy animates plastic killers.",
         "The Doctor (Third Doctor);Liz Shaw;Brigadier Lethbridge-Stewart"),
        (7, "1970-01-17", "Spearhead from Space: Part 3", "The Doctor battles the Autons in a factory.",
         "The Doctor (Third Doctor);Liz Shaw;Brigadier Lethbridge-Stewart"),
        (7, "1970-01-24", "Spearhead from Space: Part 4", "The Nestene attempts to conquer through the Doctor's mind.",
         "The Doctor (Third Doctor);Liz Shaw;Brigadier Lethbridge-Stewart"),
        (7, "1970-01-31", "Doctor Who and the Silurians: Part 1", "Unearthed reptiles challenge humanity's dominance.",
         "The Doctor (Third Doctor);Liz Shaw;Brigadier Lethbridge-Stewart"),
        (8, "1971-01-02", "Terror of the Autons: Part 1", "The Master allies with the Nestene to unleash killer plastics.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (8, "1971-01-09", "Terror of the Autons: Part 2", "Deadly dolls and wires sow panic.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (8, "1971-01-16", "Terror of the Autons: Part 3", "The Master prepares to summon the Nestene power.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (8, "1971-01-23", "Terror of the Autons: Part 4", "The Doctor thwarts the Master's invasion scheme.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (8, "1971-01-30", "The Mind of Evil: Part 1", "A prison experiment unleashes a mind parasite.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (9, "1972-01-01", "Day of the Daleks: Part 1", "Time-traveling rebels try to avert a Dalek-controlled future.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (9, "1972-01-08", "Day of the Daleks: Part 2", "The Doctor becomes a pawn in the temporal war.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (9, "1972-01-15", "Day of the Daleks: Part 3", "UNIT prepares for a Dalek assault.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (9, "1972-01-22", "Day of the Daleks: Part 4", "The Doctor stops the paradox and foils the Daleks.",
         "The Doctor (Third Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (9, "1972-01-29", "The Curse of Peladon: Part 1", "A royal mystery threatens Peladon's entry into the Federation.",
         "The Doctor (Third Doctor);Jo Grant"),
        (10, "1972-12-30", "The Three Doctors: Part 1", "Three incarnations unite to battle Omega.",
         "The Doctor (Third Doctor);The Doctor (Second Doctor);The Doctor (First Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (10, "1973-01-06", "The Three Doctors: Part 2", "The Doctors venture into the antimatter universe.",
         "The Doctor (Third Doctor);The Doctor (Second Doctor);The Doctor (First Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (10, "1973-01-13", "The Three Doctors: Part 3", "Omega traps the Doctors within his realm.",
         "The Doctor (Third Doctor);The Doctor (Second Doctor);The Doctor (First Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (10, "1973-01-20", "The Three Doctors: Part 4", "Omega is defeated and the Doctor's exile ends.",
         "The Doctor (Third Doctor);The Doctor (Second Doctor);The Doctor (First Doctor);Jo Grant;Brigadier Lethbridge-Stewart"),
        (10, "1973-01-27", "Carnival of Monsters: Part 1", "A miniscope traps the Doctor and Jo in a showman's device.",
         "The Doctor (Third Doctor);Jo Grant"),
        (11, "1973-12-15", "The Time Warrior: Part 1", "A Sontaran warrior abducts scientists to the Middle Ages.",
         "The Doctor (Third Doctor);Sarah Jane Smith"),
        (11, "1973-12-22", "The Time Warrior: Part 2", "Sarah investigates the mysterious castle.",
         "The Doctor (Third Doctor);Sarah Jane Smith"),
        (11, "1973-12-29", "The Time Warrior: Part 3", "The Doctor confronts Linx's plans.",
         "The Doctor (Third Doctor);Sarah Jane Smith"),
        (11, "1974-01-05", "The Time Warrior: Part 4", "The Doctor forces Linx to abandon his scheme.",
         "The Doctor (Third Doctor);Sarah Jane Smith"),
        (11, "1974-01-12", "Invasion of the Dinosaurs: Part 1", "London is evacuated as dinosaurs appear in the streets.",
         "The Doctor (Third Doctor);Sarah Jane Smith;Brigadier Lethbridge-Stewart"),
        (12, "1974-12-28", "Robot: Part 1", "A giant robot is manipulated to steal secrets for a fanatical group.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Brigadier Lethbridge-Stewart;Harry Sullivan"),
        (12, "1975-01-04", "Robot: Part 2", "The Doctor suspects K1's programming has been altered.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Brigadier Lethbridge-Stewart;Harry Sullivan"),
        (12, "1975-01-11", "Robot: Part 3", "UNIT battles the robot as it grows more powerful.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Brigadier Lethbridge-Stewart;Harry Sullivan"),
        (12, "1975-01-18", "Robot: Part 4", "The Doctor stops the nuclear launch and saves the robot.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Brigadier Lethbridge-Stewart;Harry Sullivan"),
        (12, "1975-01-25", "The Ark in Space: Part 1", "The TARDIS arrives on an abandoned space station poised to revive humanity.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Harry Sullivan"),
        (13, "1975-08-30", "Terror of the Zygons: Part 1", "Shape-shifting Zygons plot to conquer Earth from Loch Ness.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Harry Sullivan;Brigadier Lethbridge-Stewart"),
        (13, "1975-09-06", "Terror of the Zygons: Part 2", "The Zygons unleash the Skarasen on Scotland.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Harry Sullivan;Brigadier Lethbridge-Stewart"),
        (13, "1975-09-13", "Terror of the Zygons: Part 3", "The Doctor infiltrates the Zygon ship.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Harry Sullivan;Brigadier Lethbridge-Stewart"),
        (13, "1975-09-20", "Terror of the Zygons: Part 4", "The Doctor foils the invasion and departs with Sarah and Harry.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith;Harry Sullivan;Brigadier Lethbridge-Stewart"),
        (13, "1975-09-27", "Planet of Evil: Part 1", "A jungle world harbors a deadly antimatter creature.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith"),
        (14, "1976-09-04", "The Masque of Mandragora: Part 1", "A mysterious energy draws the TARDIS to Renaissance Italy.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith"),
        (14, "1976-09-11", "The Masque of Mandragora: Part 2", "The Mandragora Helix manipulates a secret cult.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith"),
        (14, "1976-09-18", "The Masque of Mandragora: Part 3", "Sarah is prepared for sacrifice by the cult.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith"),
        (14, "1976-09-25", "The Masque of Mandragora: Part 4", "The Doctor expels the Helix and saves the duke.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith"),
        (14, "1976-10-02", "The Hand of Fear: Part 1", "A quarry blast frees an ancient alien hand.",
         "The Doctor (Fourth Doctor);Sarah Jane Smith"),
        (15, "1977-09-03", "Horror of Fang Rock: Part 1", "An alien hunts the Doctor and lighthouse crew in thick fog.",
         "The Doctor (Fourth Doctor);Leela"),
        (15, "1977-09-10", "Horror of Fang Rock: Part 2", "A survivor hides a deadly secret.",
         "The Doctor (Fourth Doctor);Leela"),
        (15, "1977-09-17", "Horror of Fang Rock: Part 3", "The Rutan reveals its plan to signal reinforcements.",
         "The Doctor (Fourth Doctor);Leela"),
        (15, "1977-09-24", "Horror of Fang Rock: Part 4", "The Doctor destroys the Rutan with a makeshift bomb.",
         "The Doctor (Fourth Doctor);Leela"),
        (15, "1977-10-01", "The Invisible Enemy: Part 1", "A space virus infects the Doctor's mind.",
         "The Doctor (Fourth Doctor);Leela;K9"),
        (16, "1978-09-02", "The Ribos Operation: Part 1", "The Doctor begins the Key to Time quest on the cold world Ribos.",
         "The Doctor (Fourth Doctor);Romana I;K9"),
        (16, "1978-09-09", "The Ribos Operation: Part 2", "Con-men plot to sell a planet to the Graff Vynda-K.",
         "The Doctor (Fourth Doctor);Romana I;K9"),
        (16, "1978-09-16", "The Ribos Operation: Part 3", "The Doctor seeks the first segment amid catacombs.",
         "The Doctor (Fourth Doctor);Romana I;K9"),
        (16, "1978-09-23", "The Ribos Operation: Part 4", "The Doctor outwits the Graff and secures the segment.",
         "The Doctor (Fourth Doctor);Romana I;K9"),
        (16, "1978-09-30", "The Pirate Planet: Part 1", "A hollow world plunders planets for its riches.",
         "The Doctor (Fourth Doctor);Romana I;K9"),
        (17, "1979-09-01", "Destiny of the Daleks: Part 1", "The Doctor is caught in a stalemate between Daleks and Movellans.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (17, "1979-09-08", "Destiny of the Daleks: Part 2", "The Daleks capture the Doctor to locate Davros.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (17, "1979-09-15", "Destiny of the Daleks: Part 3", "Davros plots to lead the Daleks once more.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (17, "1979-09-22", "Destiny of the Daleks: Part 4", "The Movellans plan to destroy Skaro.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (17, "1979-09-29", "City of Death: Part 1", "Time slips in Paris hint at a fragmented villain.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (18, "1980-08-30", "The Leisure Hive: Part 1", "A tourist world harbors deadly experiments and political intrigue.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (18, "1980-09-06", "The Leisure Hive: Part 2", "The Doctor is aged by the Tachyon Recreation Generator.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (18, "1980-09-13", "The Leisure Hive: Part 3", "The Foamasi expose a criminal scheme.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (18, "1980-09-20", "The Leisure Hive: Part 4", "The Doctor reverses Pangol's clone army.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (18, "1980-09-27", "Meglos: Part 1", "A shape-shifting cactus impersonates the Doctor.",
         "The Doctor (Fourth Doctor);Romana II;K9"),
        (19, "1982-01-04", "Castrovalva: Part 1", "The Master traps the disoriented Doctor in a recursive city.",
         "The Doctor (Fifth Doctor);Adric;Nyssa;Tegan Jovanka"),
        (19, "1982-01-11", "Castrovalva: Part 2", "The city begins to unravel as the Master closes in.",
         "The Doctor (Fifth Doctor);Adric;Nyssa;Tegan Jovanka"),
        (19, "1982-01-18", "Castrovalva: Part 3", "Adric's manipulation threatens the Doctor's escape.",
         "The Doctor (Fifth Doctor);Adric;Nyssa;Tegan Jovanka"),
        (19, "1982-01-25", "Castrovalva: Part 4", "The Doctor exposes the illusion and defeats the Master.",
         "The Doctor (Fifth Doctor);Adric;Nyssa;Tegan Jovanka"),
        (19, "1982-02-01", "Four to Doomsday: Part 1", "Monarch's starship hides a plan to conquer Earth.",
         "The Doctor (Fifth Doctor);Adric;Nyssa;Tegan Jovanka"),
        (20, "1983-01-03", "Arc of Infinity: Part 1", "A creature from antimatter seeks form on Gallifrey through the Doctor.",
         "The Doctor (Fifth Doctor);Nyssa;Tegan Jovanka"),
        (20, "1983-01-10", "Arc of Infinity: Part 2", "The Time Lords plan to execute the Doctor.",
         "The Doctor (Fifth Doctor);Nyssa;Tegan Jovanka"),
        (20, "1983-01-17", "Arc of Infinity: Part 3", "Omega's return threatens Amsterdam and Gallifrey.",
         "The Doctor (Fifth Doctor);Nyssa;Tegan Jovanka"),
        (20, "1983-01-24", "Arc of Infinity: Part 4", "Nyssa helps free the Doctor from Omega's control.",
         "The Doctor (Fifth Doctor);Nyssa;Tegan Jovanka"),
        (20, "1983-01-31", "Snakedance: Part 1", "The Mara resurfaces through Tegan's nightmares.",
         "The Doctor (Fifth Doctor);Nyssa;Tegan Jovanka"),
        (21, "1984-01-05", "Warriors of the Deep: Part 1", "Silurians and Sea Devils attack an underwater base in 2084.",
         "The Doctor (Fifth Doctor);Tegan Jovanka;Vislor Turlough"),
        (21, "1984-01-12", "Warriors of the Deep: Part 2", "The Doctor attempts peace talks with the reptiles.",
         "The Doctor (Fifth Doctor);Tegan Jovanka;Vislor Turlough"),
        (21, "1984-01-19", "Warriors of the Deep: Part 3", "The Myrka breaks into the base.",
         "The Doctor (Fifth Doctor);Tegan Jovanka;Vislor Turlough"),
        (21, "1984-01-26", "Warriors of the Deep: Part 4", "The Doctor triggers a gas to stop the reptile assault.",
         "The Doctor (Fifth Doctor);Tegan Jovanka;Vislor Turlough"),
        (21, "1984-02-02", "The Awakening: Part 1", "A war game in a village awakens an ancient entity.",
         "The Doctor (Fifth Doctor);Tegan Jovanka;Vislor Turlough"),
        (22, "1985-01-05", "Attack of the Cybermen: Part 1", "The Doctor prevents Cybermen from altering Earth's history.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (22, "1985-01-12", "Attack of the Cybermen: Part 2", "Cyber control on Telos is destroyed.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (22, "1985-01-19", "Vengeance on Varos: Part 1", "The Doctor lands on a world ruled by televised torture.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (22, "1985-01-26", "Vengeance on Varos: Part 2", "A revolution overturns Varos's sadistic regime.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (22, "1985-02-02", "The Mark of the Rani: Part 1", "The Doctor meets another renegade Time Lord.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (23, "1986-09-06", "The Mysterious Planet: Part 1", "The Doctor is tried while uncovering secrets of Ravolox.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (23, "1986-09-13", "The Mysterious Planet: Part 2", "The Valeyard presents evidence of the Doctor's meddling.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (23, "1986-09-20", "The Mysterious Planet: Part 3", "Glitz and Dibber seek the hidden L3 robot.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (23, "1986-09-27", "The Mysterious Planet: Part 4", "The Doctor exposes the fate of Earth and the Matrix scheme.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (23, "1986-10-04", "Mindwarp: Part 1", "On Thoros Beta, the Doctor investigates weapon deals.",
         "The Doctor (Sixth Doctor);Peri Brown"),
        (24, "1987-09-07", "Time and the Rani: Part 1", "A newly regenerated Doctor confronts the Rani's experiments.",
         "The Doctor (Seventh Doctor);Mel Bush"),
        (24, "1987-09-14", "Time and the Rani: Part 2", "The Rani uses a brain drain to power her plan.",
         "The Doctor (Seventh Doctor);Mel Bush"),
        (24, "1987-09-21", "Time and the Rani: Part 3", "The Doctor faces mutant bat creatures.",
         "The Doctor (Seventh Doctor);Mel Bush"),
        (24, "1987-09-28", "Time and the Rani: Part 4", "The Doctor frees the kidnapped geniuses.",
         "The Doctor (Seventh Doctor);Mel Bush"),
        (24, "1987-10-05", "Paradise Towers: Part 1", "Kangs battle caretakers in a dystopian high-rise.",
         "The Doctor (Seventh Doctor);Mel Bush"),
        (25, "1988-10-05", "Remembrance of the Daleks: Part 1", "Dalek factions battle over the Hand of Omega in 1963 London.",
         "The Doctor (Seventh Doctor);Ace"),
        (25, "1988-10-12", "Remembrance of the Daleks: Part 2", "The Doctor manipulates the warring Dalek groups.",
         "The Doctor (Seventh Doctor);Ace"),
        (25, "1988-10-19", "Remembrance of the Daleks: Part 3", "The Renegade Daleks seize control of a school.",
         "The Doctor (Seventh Doctor);Ace"),
        (25, "1988-10-26", "Remembrance of the Daleks: Part 4", "The Doctor destroys Skaro with the Hand of Omega.",
         "The Doctor (Seventh Doctor);Ace"),
        (25, "1988-11-02", "The Happiness Patrol: Part 1", "A regime enforcing cheerfulness hides dark secrets.",
         "The Doctor (Seventh Doctor);Ace"),
        (26, "1989-09-06", "Battlefield: Part 1", "The Doctor faces Arthurian foes when Morgaine invades modern Britain.",
         "The Doctor (Seventh Doctor);Ace;Brigadier Lethbridge-Stewart"),
        (26, "1989-09-13", "Battlefield: Part 2", "The Brigadier returns to help combat the knights.",
         "The Doctor (Seventh Doctor);Ace;Brigadier Lethbridge-Stewart"),
        (26, "1989-09-20", "Battlefield: Part 3", "Morgaine seeks Excalibur beneath a lake.",
         "The Doctor (Seventh Doctor);Ace;Brigadier Lethbridge-Stewart"),
        (26, "1989-09-27", "Battlefield: Part 4", "Morgaine is defeated and peace restored.",
         "The Doctor (Seventh Doctor);Ace;Brigadier Lethbridge-Stewart"),
        (26, "1989-10-04", "Ghost Light: Part 1", "An evolving house harbors Earth's evolutionary secrets.",
         "The Doctor (Seventh Doctor);Ace"),
    ]
    episodes = [
        EpisodeSeed(season=season, air_date=air_date, title=title, description=description,
                    characters=_cast(blob))
        for season, air_date, title, description, blob in rows
    ]

    named = {}
    for episode in episodes:
        named[episode.season] = named.get(episode.season, 0) + 1
    for season, total in DOCTOR_WHO_EPISODE_COUNTS.items():
        first_day = date(DOCTOR_WHO_SEASONS[season], 1, 1)
        regulars = _names(_doctor_for_season(season), *_companions_for_season(season))
        for number in range(named.get(season, 0) + 1, total + 1):
            episodes.append(EpisodeSeed(
                season=season,
                title=f"S{season}E{number}",
                air_date=(first_day + timedelta(weeks=number - 1)).isoformat(),
                description=f"Episode {number} of season {season}.",
                characters=regulars,
            ))

    return ShowSeed(
        key="doctor-who",
        title="Doctor Who",
        year=1963,
        description="BBC science fiction series (Classic era)",
        seasons=dict(DOCTOR_WHO_SEASONS),
        cast=dict(DOCTOR_WHO_CAST),
        episodes=episodes,
    )


def space_1999() -> ShowSeed:
    s1 = ("Commander John Koenig=Martin Landau;Dr. Helena Russell=Barbara Bain;Professor Victor Bergman=Barry Morse;"
          "Captain Alan Carter=Nick Tate;Paul Morrow=Prentis Hancock;Sandra Benes=Zienia Merton")
    s1_plus_kano = ("Commander John Koenig=Martin Landau;Dr. Helena Russell=Barbara Bain;Professor Victor Bergman=Barry Morse;"
                    "Captain Alan Carter=Nick Tate;Sandra Benes=Zienia Merton;David Kano=Clifton Jones")
    s1_plus_mathias = ("Commander John Koenig=Martin Landau;Dr. Helena Russell=Barbara Bain;Professor Victor Bergman=Barry Morse;"
                       "Captain Alan Carter=Nick Tate;Paul Morrow=Prentis Hancock;Dr. Bob Mathias=Anton Phillips")
    s2_chars = ("Commander John Koenig=Martin Landau;Dr. Helena Russell=Barbara Bain;Maya=Catherine Schell;"
                "Tony Verdeschi=Tony Anholt;Captain Alan Carter=Nick Tate;Sandra Benes=Zienia Merton;Dr. Ben Vincent=Jeffrey Kissoon")
    s2_with_yasko = ("Commander John Koenig=Martin Landau;Dr. Helena Russell=Barbara Bain;Maya=Catherine Schell;"
                     "Tony Verdeschi=Tony Anholt;Captain Alan Carter=Nick Tate;Yasko=Yasuko Nagazumi;Dr. Ben Vincent=Jeffrey Kissoon")
    rows = [
        (1, "1975-09-04", "Breakaway", "A nuclear waste explosion hurls Moonbase Alpha into deep space.", s1),
        (1, "1975-09-11", "Matter of Life and Death", "A survivor from a doomed mission brings an antimatter threat back to Alpha.", s1),
        (1, "1975-09-18", "Black Sun", "The Moon is drawn toward a mysterious black sun that defies physics.", s1_plus_kano),
        (1, "1975-09-25", "Ring Around the Moon", "An alien probe traps the Moon to catalogue humanity.", s1),
        (1, "1975-10-02", "Earthbound", "Exiled aliens offer a way back to Earth for a terrible price.", s1),
        (1, "1975-10-09", "Another Time, Another Place", "A duplicate Moon reveals Alpha's possible future.", s1),
        (1, "1975-10-16", "Missing Link", "Koenig is studied by an alien scientist while lying comatose.", s1_plus_mathias),
        (1, "1975-10-23", "Guardian of Piri", "A seductive computer lures Alphans into blissful catatonia.", s1),
        (1, "1975-10-30", "Force of Life", "An energy being possesses technician Anton Zoref and drains power.", s1_plus_kano),
        (1, "1975-11-06", "Alpha Child", "A newborn rapidly matures into a telekinetic agent of an alien race.", s1),
        (1, "1975-11-13", "The Last Sunset", "A mysterious probe gives Alpha an atmosphere that soon turns deadly.", s1),
        (1, "1975-11-20", "Voyager's Return", "The creator of a deadly probe seeks redemption among the Alphans.", s1_plus_kano),
        (1, "1975-11-27", "Collision Course", "Koenig must trust a visionary who claims collision means salvation.", s1),
        (1, "1975-12-04", "Death's Other Dominion", "Immortality tempts the Alphans on the frozen world Ultima Thule.", s1),
        (1, "1975-12-11", "The Full Circle", "A time mist devolves Alphans into prehistoric hunters.", s1_plus_kano),
        (1, "1975-12-18", "End of Eternity", "A murderous immortal is freed from an asteroid prison.", s1),
        (1, "1975-12-25", "War Games", "Illusions of war test Koenig's resolve and empathy.", s1_plus_kano),
        (1, "1976-01-01", "The Last Enemy", "Alpha is caught between two warring planets bent on annihilation.", s1),
        (1, "1976-01-08", "The Troubled Spirit", "A musician's experiments unleash a vengeful apparition.", s1_plus_mathias),
        (1, "1976-01-15", "Space Brain", "A colossal brain defends itself from an accidental attack.", s1_plus_kano),
        (1, "1976-01-22", "The Infernal Machine", "A lonely living starship named Gwent seeks companionship.", s1),
        (1, "1976-01-29", "Mission of the Darians", "Refugees on a vast generation ship prey on devolved survivors.", s1),
        (1, "1976-02-05", "Dragon's Domain", "An astronaut confronts the nightmare that destroyed his crew.", s1_plus_kano),
        (1, "1976-02-12", "Testament of Arkadia", "Ruins hint that the Alphans' ancestors seeded life on Earth.", s1),
        (2, "1976-09-04", "The Metamorph", "Mentor of Psychon imprisons Alphans while Maya questions her loyalty.", s2_chars),
        (2, "1976-09-11", "The Exiles", "Cryonic exiles awaken and demand revenge on their homeworld.", s2_chars),
        (2, "1976-09-18", "One Moment of Humanity", "Emotionless androids abduct Maya to learn passion.", s2_with_yasko),
        (2, "1976-09-25", "All That Glisters", "A living rock drains Alpha's water to survive.", s2_chars),
        (2, "1976-10-02", "Journey to Where", "A teleport experiment strands an Alpha team in 14th-century Scotland.", s2_chars),
        (2, "1976-10-09", "The Taybor", "A flamboyant trader offers passage home for a shocking price.", s2_chars),
        (2, "1976-10-16", "The Rules of Luton", "A sentient planet puts Koenig and Maya on trial by combat.", s2_chars),
        (2, "1976-10-23", "The Mark of Archanon", "A fugitive family carries a dangerous psychic legacy.", s2_chars),
        (2, "1976-10-30", "Brian the Brain", "A whimsical robot commandeers the Eagle fleet for its own mission.", s2_chars),
        (2, "1976-11-06", "New Adam, New Eve", "A godlike being reshuffles Alpha's command team to found a new Eden.", s2_with_yasko),
        (2, "1976-11-13", "The AB Chrysalis", "A planet's automated defenses prepare to obliterate Alpha.", s2_chars),
        (2, "1976-11-20", "Catacombs of the Moon", "A desperate search for titanium reveals hidden caverns beneath Alpha.", s2_chars),
        (2, "1976-11-27", "Seed of Destruction", "A ruthless duplicate of Koenig seeks to drain Alpha's energy.", s2_chars),
        (2, "1976-12-04", "The Beta Cloud", "A hulking guardian storms Alpha to steal its life support.", s2_chars),
        (2, "1976-12-11", "A Matter of Balance", "A dimension-hopping predator targets Maya to sustain itself.", s2_with_yasko),
        (2, "1976-12-18", "Space Warp", "Maya's fever triggers uncontrollable shapeshifting as Koenig is captured.", s2_chars),
        (2, "1976-12-25", "The Bringers of Wonder Part 1", "Alpha celebrates unexpected visitors who may be monstrous deceivers.", s2_chars),
        (2, "1977-01-01", "The Bringers of Wonder Part 2", "Koenig fights to expose the aliens before Alpha is consumed.", s2_chars),
        (2, "1977-01-08", "The Seance Spectre", "A fanatic mutineer promises salvation through deadly visions.", s2_with_yasko),
        (2, "1977-01-15", "Dorzak", "Maya's revered mentor manipulates Alpha after his rescue from stasis.", s2_chars),
        (2, "1977-01-22", "The Lambda Factor", "A mysterious energy field amplifies hidden guilt and telepathy.", s2_with_yasko),
        (2, "1977-01-29", "The Immunity Syndrome", "An alien organism renders Alpha's environment lethal to humans.", s2_chars),
        (2, "1977-02-05", "Devil's Planet", "Koenig is trapped on a prison world ruled by ruthless wardens.", s2_chars),
        (2, "1977-02-12", "The Dorcons", "A dying empire hunts Maya for the secret of immortality.", s2_chars),
    ]
    return ShowSeed(
        key="space-1999",
        title="Space: 1999",
        year=1975,
        description="British-Italian science fiction series",
        seasons={1: 1975, 2: 1976},
        cast={
            "Commander John Koenig": "Martin Landau",
            "Dr. Helena Russell": "Barbara Bain",
            "Professor Victor Bergman": "Barry Morse",
            "Captain Alan Carter": "Nick Tate",
            "Paul Morrow": "Prentis Hancock",
            "Sandra Benes": "Zienia Merton",
            "David Kano": "Clifton Jones",
            "Dr. Bob Mathias": "Anton Phillips",
            "Tanya Alexander": "Suzanne Roquette",
            "Maya": "Catherine Schell",
            "Tony Verdeschi": "Tony Anholt",
            "Dr. Ben Vincent": "Jeffrey Kissoon",
            "Yasko": "Yasuko Nagazumi",
        },
        episodes=[
            EpisodeSeed(season=season, air_date=air_date, title=title, description=description,
                        characters=_cast(blob))
            for season, air_date, title, description, blob in rows
        ],
    )


MASSIVE_ROSTER = {
    "Nova Vector": "Ada Quantum",
    "Dex Byte": "Troy Circuit",
    "Rhea Horizon": "Imani Pulse",
    "Milo Flux": "Ruben Signal",
    "Kira Lattice": "Elena Wave",
    "Quinn Parsec": "Noah Orbit",
    "Vera Kernel": "Sasha Logic",
    "Orion Stack": "Harper Thread",
    "Lena Voltage": "Maya Current",
    "Ivo Beacon": "Julian Phase",
}
FILLER_CHUNK = "This filler text inflates the export payload for stress testing purposes."


def _positive_env(name: str, default: int) -> int:
    value = int(os.getenv(name, str(default)))
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer")
    return value


def massive_showcase() -> ShowSeed:
    """Synthetic show sized by environment variables for export stress tests."""
    title = os.getenv("SHOW_TITLE", "Massive Export Showcase")
    description = os.getenv(
        "SHOW_DESCRIPTION", "Synthetic load fixture for exercising database export size limits."
    )
    year = int(os.getenv("SHOW_YEAR", "2030"))
    total_seasons = _positive_env("TOTAL_SEASONS", 6)
    episodes_per_season = _positive_env("EPISODES_PER_SEASON", 250)
    characters_per_episode = _positive_env("CHARACTERS_PER_EPISODE", 2)
    repeats = int(os.getenv("DESCRIPTION_REPEATS", "320"))

    long_description = f"{FILLER_CHUNK} " * repeats
    roster = list(MASSIVE_ROSTER)
    episodes = []
    for season in range(1, total_seasons + 1):
        for episode in range(1, episodes_per_season + 1):
            month = ((episode - 1) // 28) % 12 + 1
            day = (episode - 1) % 28 + 1
            linked = [roster[(episode + offset) % len(roster)] for offset in range(characters_per_episode)]
            episodes.append(EpisodeSeed(
                season=season,
                title=f"Load Test S{season:02d}E{episode:03d}",
                air_date=f"{2040 + season:04d}-{month:02d}-{day:02d}",
                description=f"Season {season} Episode {episode}. {long_description}",
                characters=_names(*dict.fromkeys(linked)),
            ))

    return ShowSeed(
        key="massive",
        title=title,
        year=year,
        description=description,
        seasons={season: year + season - 1 for season in range(1, total_seasons + 1)},
        cast=dict(MASSIVE_ROSTER),
        episodes=episodes,
    )


SEEDS: Dict[str, Callable[[], ShowSeed]] = {
    "farscape": farscape,
    "the-expanse": the_expanse,
    "stargate-universe": stargate_universe,
    "sapphire-and-steel": sapphire_and_steel,
    "twilight-zone": twilight_zone,
    "doctor-who": doctor_who,
    "space-1999": space_1999,
    "massive": massive_showcase,
}
