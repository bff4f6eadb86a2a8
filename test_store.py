# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the in-memory store, the integrity checks and the domain services.
Every test builds its own isolated WorshipStore.
"""

import threading

import pytest
from prometheus_client import REGISTRY

from worship_api.models.domain import (
    AccessLevel,
    EntityKind,
    MemberDraft,
    MemberPatch,
    ScaleDraft,
    ScalePatch,
    SongAssignment,
    SongDraft,
    SongPatch,
    apply_patch,
)
from worship_api.models.errors import (
    DuplicateEmail,
    RecordNotFound,
    ReferenceNotFound,
    ValidationError,
)
from worship_api.repositories.identity import IdentityAllocator
from worship_api.repositories.store import WorshipStore
from worship_api.services.enrichment import enrich_scale, enrich_song, public_member
from worship_api.services.integrity import ReferenceValidator
from worship_api.services.member_service import MemberService
from worship_api.services.scale_service import ScaleService
from worship_api.services.seed import seed_default_data
from worship_api.services.song_service import SongService


def member_draft(email: str = "a@band.com", **overrides) -> MemberDraft:
    data = {
        "name": "Alice",
        "voice_type": "Soprano",
        "email": email,
        "password_hash": "00$00",
        "access_level": AccessLevel.COMMON,
    }
    data.update(overrides)
    return MemberDraft(**data)


def song_draft(soloist_id: int, **overrides) -> SongDraft:
    data = {
        "name": "Amazing Grace",
        "key": "C",
        "version_link": "https://example.com/grace",
        "lyrics": "Amazing grace, how sweet the sound",
        "soloist_id": soloist_id,
    }
    data.update(overrides)
    return SongDraft(**data)


# ============================================
# Fixtures
# ============================================
@pytest.fixture
def store():
    return WorshipStore()


@pytest.fixture
def validator(store):
    return ReferenceValidator(store)


@pytest.fixture
def members(store, validator):
    return MemberService(store, validator)


@pytest.fixture
def songs(store, validator):
    return SongService(store, validator)


@pytest.fixture
def scales(store, validator):
    return ScaleService(store, validator)


@pytest.fixture
def seeded(store, members, songs):
    seed_default_data(members, songs)
    return store


# ============================================
# Identity Allocator
# ============================================
class TestIdentityAllocator:
    def test_starts_at_one_per_kind(self):
        allocator = IdentityAllocator()
        assert allocator.next(EntityKind.MEMBER) == 1
        assert allocator.next(EntityKind.SONG) == 1
        assert allocator.next(EntityKind.SCALE) == 1
        assert allocator.next(EntityKind.MEMBER) == 2

    def test_reset_restarts_counters(self):
        allocator = IdentityAllocator()
        allocator.next(EntityKind.SONG)
        allocator.next(EntityKind.SONG)
        allocator.reset()
        assert allocator.last_issued(EntityKind.SONG) == 0
        assert allocator.next(EntityKind.SONG) == 1

    def test_concurrent_allocation_is_unique(self):
        allocator = IdentityAllocator()
        issued: list[int] = []
        lock = threading.Lock()

        def worker():
            for _ in range(200):
                value = allocator.next(EntityKind.SCALE)
                with lock:
                    issued.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(issued) == list(range(1, 1601))


# ============================================
# Entity Store
# ============================================
class TestEntityStore:
    def test_create_assigns_fresh_id(self, store):
        first = store.members.create(member_draft("a@band.com"))
        second = store.members.create(member_draft("b@band.com"))
        assert (first.id, second.id) == (1, 2)

    def test_ids_monotonic_across_deletes(self, store):
        issued = []
        for i in range(5):
            record = store.members.create(member_draft(f"m{i}@band.com"))
            issued.append(record.id)
            if i % 2 == 0:
                assert store.members.delete(record.id) is True
        assert issued == sorted(issued)
        assert len(set(issued)) == len(issued)
        again = store.members.create(member_draft("late@band.com"))
        assert again.id > max(issued)

    def test_list_preserves_insertion_order_without_gaps(self, store):
        for i in range(4):
            store.members.create(member_draft(f"m{i}@band.com", name=f"M{i}"))
        store.members.delete(2)
        assert [m.id for m in store.members.list()] == [1, 3, 4]

    def test_get_by_id_absent_returns_none(self, store):
        assert store.members.get_by_id(42) is None

    def test_create_is_defensive_copy(self, store):
        draft = song_draft(1)
        created = store.songs.create(draft)
        draft.name = "Changed after create"
        created.name = "Changed on returned copy"
        assert store.songs.get_by_id(created.id).name == "Amazing Grace"

    def test_scale_assignments_copied(self, store):
        assignments = [SongAssignment(song_id=1, soloist_id=1)]
        scale = store.scales.create(ScaleDraft(name="Sunday", date="2024-01-07", songs=assignments))
        assignments.append(SongAssignment(song_id=2, soloist_id=2))
        scale.songs.clear()
        assert len(store.scales.get_by_id(1).songs) == 1

    def test_update_merges_only_set_fields(self, store):
        original = store.members.create(member_draft("a@band.com"))
        updated = store.members.update(original.id, MemberPatch(name="Alicia"))
        assert updated.name == "Alicia"
        assert updated.email == original.email
        assert updated.voice_type == original.voice_type
        assert updated.access_level == original.access_level
        assert updated.id == original.id

    def test_update_absent_returns_none_and_creates_nothing(self, store):
        assert store.members.update(7, MemberPatch(name="Ghost")) is None
        assert store.members.count() == 0

    def test_delete_missing_returns_false(self, store):
        assert store.scales.delete(99) is False

    def test_reset_clears_records_and_ids(self, store):
        store.members.create(member_draft())
        store.songs.create(song_draft(1))
        store.reset()
        assert store.counts() == {"member": 0, "song": 0, "scale": 0}
        assert store.members.create(member_draft()).id == 1

    def test_reset_zeroes_live_record_gauges(self, seeded, scales):
        scales.create_scale(ScaleDraft(
            name="Sunday Service",
            date="2024-01-07",
            songs=[SongAssignment(song_id=1, soloist_id=2)],
        ))
        assert REGISTRY.get_sample_value("worship_live_records", {"kind": "scale"}) == 1
        seeded.reset()
        for kind in ("member", "song", "scale"):
            assert REGISTRY.get_sample_value("worship_live_records", {"kind": kind}) == 0


class TestApplyPatch:
    def test_merge_law(self, store):
        record = store.songs.create(song_draft(1))
        patch = SongPatch(key="D", lyrics="new words")
        merged = apply_patch(record, patch)
        for field in ("id", "name", "version_link", "soloist_id"):
            assert getattr(merged, field) == getattr(record, field)
        assert merged.key == "D"
        assert merged.lyrics == "new words"

    def test_empty_patch_is_identity(self, store):
        record = store.members.create(member_draft())
        assert apply_patch(record, MemberPatch()) == record

    def test_list_field_replaced_wholesale(self, store):
        record = store.scales.create(ScaleDraft(
            name="Sunday",
            date="2024-01-07",
            songs=[SongAssignment(song_id=1, soloist_id=1), SongAssignment(song_id=2, soloist_id=2)],
        ))
        merged = apply_patch(record, ScalePatch(songs=[SongAssignment(song_id=3, soloist_id=1)]))
        assert [(a.song_id, a.soloist_id) for a in merged.songs] == [(3, 1)]
        assert merged.name == "Sunday"


# ============================================
# Referential Integrity
# ============================================
class TestReferenceValidator:
    def test_unknown_soloist_rejected(self, validator):
        with pytest.raises(ReferenceNotFound) as exc:
            validator.validate_soloist_reference(9)
        assert exc.value.ref_id == 9
        assert exc.value.field == "soloist_id"
        assert exc.value.kind == "member"

    def test_empty_assignments_rejected(self, validator):
        with pytest.raises(ValidationError):
            validator.validate_scale_assignments([])

    def test_first_unresolved_reference_reported(self, seeded, validator):
        assignments = [
            SongAssignment(song_id=1, soloist_id=2),
            SongAssignment(song_id=77, soloist_id=88),
            SongAssignment(song_id=99, soloist_id=1),
        ]
        with pytest.raises(ReferenceNotFound) as exc:
            validator.validate_scale_assignments(assignments)
        assert exc.value.kind == "song"
        assert exc.value.ref_id == 77
        assert exc.value.field == "songs[1].song_id"

    def test_unresolved_soloist_in_assignment(self, seeded, validator):
        with pytest.raises(ReferenceNotFound) as exc:
            validator.validate_scale_assignments([SongAssignment(song_id=1, soloist_id=50)])
        assert exc.value.kind == "member"
        assert exc.value.field == "songs[0].soloist_id"

    def test_email_comparison_is_case_sensitive(self, store, validator):
        store.members.create(member_draft("x@y.com"))
        validator.validate_unique_email("X@y.com")
        with pytest.raises(DuplicateEmail):
            validator.validate_unique_email("x@y.com")

    def test_email_check_excludes_record_being_updated(self, store, validator):
        member = store.members.create(member_draft("x@y.com"))
        validator.validate_unique_email("x@y.com", exclude_id=member.id)


# ============================================
# Services
# ============================================
class TestMemberService:
    def test_create_hashes_password(self, members):
        member = members.create_member("Bob", "Bass", "bob@band.com", "s3cret", AccessLevel.ADMIN)
        assert member.password_hash != "s3cret"
        assert "$" in member.password_hash

    def test_duplicate_email_on_create(self, members, store):
        members.add_member(member_draft("x@y.com"))
        with pytest.raises(DuplicateEmail) as exc:
            members.add_member(member_draft("x@y.com", name="Other"))
        assert exc.value.email == "x@y.com"
        assert store.members.count() == 1

    def test_update_own_unchanged_email_allowed(self, members):
        member = members.add_member(member_draft("x@y.com"))
        updated = members.update_member(member.id, {"email": "x@y.com", "name": "Renamed"})
        assert updated.name == "Renamed"

    def test_update_to_taken_email_rejected(self, members, store):
        members.add_member(member_draft("a@y.com"))
        second = members.add_member(member_draft("b@y.com"))
        with pytest.raises(DuplicateEmail):
            members.update_member(second.id, {"email": "a@y.com"})
        assert store.members.get_by_id(second.id).email == "b@y.com"

    def test_update_password_rehashes(self, members):
        member = members.add_member(member_draft())
        updated = members.update_member(member.id, {"password": "new-pass"})
        assert updated.password_hash != member.password_hash

    def test_update_missing_raises(self, members):
        with pytest.raises(RecordNotFound):
            members.update_member(404, {"name": "Nobody"})

    def test_delete_does_not_cascade(self, seeded, members, songs):
        song = songs.get_song(1)
        members.delete_member(song.soloist_id)
        assert song.soloist_id not in [m.id for m in members.list_members()]
        assert songs.get_song(1).soloist_id == song.soloist_id

    def test_delete_missing_raises(self, members):
        with pytest.raises(RecordNotFound):
            members.delete_member(3)


class TestSongService:
    def test_unknown_soloist_leaves_collection_unchanged(self, seeded, songs):
        before = songs.list_songs()
        with pytest.raises(ReferenceNotFound):
            songs.create_song(song_draft(999))
        assert songs.list_songs() == before

    def test_update_with_unknown_soloist_leaves_song_unchanged(self, seeded, songs):
        before = songs.get_song(2)
        with pytest.raises(ReferenceNotFound):
            songs.update_song(2, SongPatch(name="Renamed", soloist_id=999))
        assert songs.get_song(2) == before

    def test_update_soloist(self, seeded, songs):
        updated = songs.update_song(1, SongPatch(soloist_id=3))
        assert updated.soloist_id == 3
        assert updated.name == "Amazing Grace"

    def test_create_racing_soloist_delete_never_commits_after_delete(self, seeded, songs, members, store):
        created: list[int] = []
        rejected: list[Exception] = []
        results_lock = threading.Lock()
        start = threading.Barrier(5)
        issued_at_delete: list[int] = []

        def creator():
            start.wait()
            for _ in range(200):
                try:
                    song = songs.create_song(song_draft(3))
                except ReferenceNotFound as e:
                    with results_lock:
                        rejected.append(e)
                else:
                    with results_lock:
                        created.append(song.id)

        def deleter():
            start.wait()
            members.delete_member(3)
            issued_at_delete.append(store.allocator.last_issued(EntityKind.SONG))

        threads = [threading.Thread(target=creator) for _ in range(4)]
        threads.append(threading.Thread(target=deleter))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(created) + len(rejected) == 800
        assert len(set(created)) == len(created)
        assert all(song_id <= issued_at_delete[0] for song_id in created)
        assert store.allocator.last_issued(EntityKind.SONG) == issued_at_delete[0]
        assert store.songs.count() == 5 + len(created)


class TestScaleService:
    def test_empty_assignments_rejected_on_create(self, seeded, scales, store):
        with pytest.raises(ValidationError):
            scales.create_scale(ScaleDraft(name="Empty", date="2024-01-07", songs=[]))
        assert store.scales.count() == 0
        assert store.allocator.last_issued(EntityKind.SCALE) == 0

    def test_order_of_assignments_preserved(self, seeded, scales):
        pairs = [(3, 1), (1, 4), (2, 2)]
        scale = scales.create_scale(ScaleDraft(
            name="Evening",
            date="2024-02-04",
            songs=[SongAssignment(song_id=s, soloist_id=m) for s, m in pairs],
        ))
        assert [(a.song_id, a.soloist_id) for a in scales.get_scale(scale.id).songs] == pairs

    def test_end_to_end_scenario(self, seeded, scales):
        assert seeded.counts() == {"member": 5, "song": 5, "scale": 0}

        scale = scales.create_scale(ScaleDraft(
            name="Sunday Service",
            date="2024-01-07",
            songs=[SongAssignment(song_id=1, soloist_id=2)],
        ))
        assert scale.id == 1
        assert len(scale.songs) == 1

        with pytest.raises(ValidationError):
            scales.update_scale(scale.id, ScalePatch(songs=[]))
        assert scales.get_scale(scale.id) == scale

        scales.delete_scale(scale.id)
        assert seeded.scales.get_by_id(scale.id) is None

    def test_concurrent_creates_get_unique_increasing_ids(self, seeded, scales, store):
        per_thread: dict[int, list[int]] = {}

        def worker(index: int):
            ids = []
            for n in range(50):
                scale = scales.create_scale(ScaleDraft(
                    name=f"Rehearsal {index}-{n}",
                    date="2024-03-03",
                    songs=[SongAssignment(song_id=1 + n % 5, soloist_id=1 + index % 5)],
                ))
                ids.append(scale.id)
            per_thread[index] = ids

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for ids in per_thread.values():
            assert ids == sorted(ids)
        all_ids = sorted(i for ids in per_thread.values() for i in ids)
        assert all_ids == list(range(1, 301))
        assert [s.id for s in scales.list_scales()] == all_ids


# ============================================
# Seed & Enrichment
# ============================================
class TestSeed:
    def test_seed_creates_five_members_and_songs(self, seeded):
        members = seeded.members.list()
        songs = seeded.songs.list()
        assert len(members) == 5
        assert len(songs) == 5
        assert len({m.voice_type for m in members}) == 5
        assert sorted(s.soloist_id for s in songs) == [m.id for m in members]

    def test_first_seeded_member_is_admin(self, seeded):
        levels = [m.access_level for m in seeded.members.list()]
        assert levels[0] == AccessLevel.ADMIN
        assert levels[1:] == [AccessLevel.COMMON] * 4


class TestEnrichment:
    def test_public_member_strips_password(self, seeded):
        data = public_member(seeded.members.get_by_id(1))
        assert "password_hash" not in data
        assert data["access_level"] == "admin"

    def test_song_soloist_snapshot(self, seeded):
        data = enrich_song(seeded.songs.get_by_id(2), seeded)
        assert data["soloist"] == {"id": 2, "name": "Maria Santos", "voice_type": "Soprano"}

    def test_dangling_references_become_none(self, seeded, scales):
        scale = scales.create_scale(ScaleDraft(
            name="Sunday", date="2024-01-07", songs=[SongAssignment(song_id=1, soloist_id=2)],
        ))
        seeded.songs.delete(1)
        seeded.members.delete(2)
        data = enrich_scale(scales.get_scale(scale.id), seeded)
        assert data["songs"][0]["song"] is None
        assert data["songs"][0]["soloist"] is None
        assert data["songs"][0]["song_id"] == 1
