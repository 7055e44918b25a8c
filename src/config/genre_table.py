"""Static artist-name → genre table used by the normalizer.

# ─── PURPOSE ───────────────────────────────────────────────────────────
#
# The primary catalog does not carry a genre for its artists, so every
# successful artists refresh enriches each record from this table.  Keys
# are the exact display names the catalog returns (case-sensitive).  A
# name that is not listed falls back to the creation-year banding in
# src/services/normalizer.py.
#
# The table is pure data: no I/O, built once at import time.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

GENRE_TABLE: dict[str, str] = {
    "Queen": "Rock",
    "SOJA": "Reggae",
    "Pink Floyd": "Rock progressif",
    "Scorpions": "Heavy Metal",
    "XXXTentacion": "Hip-Hop",
    "Mac Miller": "Hip-Hop/Rap",
    "Joyner Lucas": "Hip-Hop/Rap",
    "Kendrick Lamar": "Hip-Hop/Rap",
    "AC/DC": "Hard Rock",
    "Pearl Jam": "Grunge",
    "Katy Perry": "Pop",
    "Rihanna": "Pop/R&B",
    "Genesis": "Rock progressif",
    "Phil Collins": "Rock/Pop",
    "Led Zeppelin": "Hard Rock",
    "The Jimi Hendrix Experience": "Rock",
    "Bee Gees": "Disco",
    "Deep Purple": "Hard Rock",
    "Aerosmith": "Hard Rock",
    "Dire Straits": "Rock",
    "Mamonas Assassinas": "Rock/Samba",
    "Thirty Seconds to Mars": "Rock alternatif",
    "Imagine Dragons": "Pop Rock",
    "Juice Wrld": "Hip-Hop",
    "Logic": "Hip-Hop/Rap",
    "Alec Benjamin": "Pop",
    "Bobby McFerrins": "Jazz/Pop",
    "R3HAB": "EDM",
    "Post Malone": "Hip-Hop/Pop",
    "Travis Scott": "Hip-Hop",
    "J. Cole": "Hip-Hop/Rap",
    "Nickelback": "Rock alternatif",
    "Mobb Deep": "Hip-Hop",
    "Guns N' Roses": "Hard Rock",
    "NWA": "Hip-Hop",
    "U2": "Rock",
    "Arctic Monkeys": "Rock indépendant",
    "Fall Out Boy": "Pop Punk",
    "Gorillaz": "Alternative Hip-Hop",
    "Eagles": "Rock",
    "Linkin Park": "Rock alternatif",
    "Red Hot Chili Peppers": "Funk Rock",
    "Eminem": "Hip-Hop",
    "Green Day": "Punk Rock",
    "Metallica": "Heavy Metal",
    "Coldplay": "Pop Rock",
    "Maroon 5": "Pop",
    "Twenty One Pilots": "Alternative",
    "The Rolling Stones": "Rock",
    "Muse": "Rock alternatif",
    "Foo Fighters": "Rock alternatif",
    "The Chainsmokers": "EDM/Pop",
}

# Creation-year bands applied when a name is not in GENRE_TABLE.
CLASSIC_ROCK_BEFORE = 1980
ROCK_BEFORE = 2000

GENRE_CLASSIC_ROCK = "Classic Rock"
GENRE_ROCK = "Rock"
GENRE_POP_ROCK = "Pop/Rock"


def lookup_genre(name: str) -> str | None:
    """Return the curated genre for *name*, or ``None`` if not listed."""
    return GENRE_TABLE.get(name)
