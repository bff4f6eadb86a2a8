# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Output enrichment — pure read-only shaping, no side effects.

Members leave the core without their password hash. Songs and scales carry
only reference ids; these helpers add denormalized snapshots of the
referenced records, or ``None`` where a reference dangles.
"""

from typing import Any, Optional

from worship_api.models.domain import Member, Scale, Song
from worship_api.repositories.store import WorshipStore


def public_member(member: Member) -> dict[str, Any]:
    return member.model_dump(mode="json", exclude={"password_hash"})


def member_snapshot(member: Optional[Member]) -> Optional[dict[str, Any]]:
    if member is None:
        return None
    return {"id": member.id, "name": member.name, "voice_type": member.voice_type}


def song_snapshot(song: Optional[Song]) -> Optional[dict[str, Any]]:
    if song is None:
        return None
    return {
        "id": song.id,
        "name": song.name,
        "key": song.key,
        "version_link": song.version_link,
    }


def enrich_song(song: Song, store: WorshipStore) -> dict[str, Any]:
    data = song.model_dump(mode="json")
    data["soloist"] = member_snapshot(store.members.get_by_id(song.soloist_id))
    return data


def enrich_scale(scale: Scale, store: WorshipStore) -> dict[str, Any]:
    data = scale.model_dump(mode="json")
    data["songs"] = [
        {
            "song_id": assignment.song_id,
            "soloist_id": assignment.soloist_id,
            "song": song_snapshot(store.songs.get_by_id(assignment.song_id)),
            "soloist": member_snapshot(store.members.get_by_id(assignment.soloist_id)),
        }
        for assignment in scale.songs
    ]
    return data
