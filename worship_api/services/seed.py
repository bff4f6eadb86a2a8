# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Startup seed — five members (one per voice type) and five songs,
each song soloed by a different seeded member.
"""

from functools import lru_cache
from typing import Any

from worship_api.core.config import settings
from worship_api.core.logging import get_logger
from worship_api.core.security import hash_password
from worship_api.models.domain import AccessLevel, MemberDraft, SongDraft
from worship_api.services.member_service import MemberService
from worship_api.services.song_service import SongService

logger = get_logger(__name__)

DEFAULT_MEMBERS: list[dict[str, Any]] = [
    {"name": "João Silva", "voice_type": "Tenor", "email": "joao@banda.com", "access_level": AccessLevel.ADMIN},
    {"name": "Maria Santos", "voice_type": "Soprano", "email": "maria@banda.com", "access_level": AccessLevel.COMMON},
    {"name": "Pedro Costa", "voice_type": "Baritone", "email": "pedro@banda.com", "access_level": AccessLevel.COMMON},
    {"name": "Ana Oliveira", "voice_type": "Contralto", "email": "ana@banda.com", "access_level": AccessLevel.COMMON},
    {"name": "Carlos Lima", "voice_type": "Bass", "email": "carlos@banda.com", "access_level": AccessLevel.COMMON},
]

DEFAULT_SONGS: list[dict[str, str]] = [
    {
        "name": "Amazing Grace",
        "key": "C",
        "version_link": "https://youtube.com/watch?v=amazing-grace-c",
        "lyrics": "Amazing grace, how sweet the sound\nThat saved a wretch like me\n"
                  "I once was lost, but now I'm found\nWas blind, but now I see",
    },
    {
        "name": "How Great Thou Art",
        "key": "G",
        "version_link": "https://youtube.com/watch?v=how-great-thou-art-g",
        "lyrics": "O Lord my God, when I in awesome wonder\nConsider all the worlds Thy hands have made\n"
                  "I see the stars, I hear the rolling thunder\nThy power throughout the universe displayed",
    },
    {
        "name": "It Is Well With My Soul",
        "key": "D",
        "version_link": "https://youtube.com/watch?v=it-is-well-d",
        "lyrics": "When peace like a river attendeth my way\nWhen sorrows like sea billows roll\n"
                  "Whatever my lot, Thou hast taught me to say\nIt is well, it is well with my soul",
    },
    {
        "name": "Great Is Thy Faithfulness",
        "key": "F",
        "version_link": "https://youtube.com/watch?v=great-is-thy-faithfulness-f",
        "lyrics": "Great is Thy faithfulness, O God my Father\nThere is no shadow of turning with Thee\n"
                  "Thou changest not, Thy compassions, they fail not\nAs Thou hast been, Thou forever will be",
    },
    {
        "name": "Be Thou My Vision",
        "key": "A",
        "version_link": "https://youtube.com/watch?v=be-thou-my-vision-a",
        "lyrics": "Be Thou my vision, O Lord of my heart\nNaught be all else to me, save that Thou art\n"
                  "Thou my best thought, by day or by night\nWaking or sleeping, Thy presence my light",
    },
]


@lru_cache(maxsize=None)
def _placeholder_hash(password: str) -> str:
    # One hash shared by every seeded member; re-seeding reuses it.
    return hash_password(password)


def seed_default_data(member_service: MemberService, song_service: SongService) -> dict[str, Any]:
    """Create the default members, then one song per member as soloist."""
    password_hash = _placeholder_hash(settings.SEED_DEFAULT_PASSWORD)

    members = [
        member_service.add_member(MemberDraft(password_hash=password_hash, **data))
        for data in DEFAULT_MEMBERS
    ]
    songs = [
        song_service.create_song(SongDraft(soloist_id=soloist.id, **data))
        for data, soloist in zip(DEFAULT_SONGS, members)
    ]

    logger.info("Seeded %d members and %d songs", len(members), len(songs))
    return {"members": members, "songs": songs}
