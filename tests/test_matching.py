"""
Tests for match generation and retrieval against the in-memory store.
"""

import asyncio

import pytest

from mentorlink.models.match import Match
from mentorlink.services.matching import (
    generate_matches_for_professional,
    generate_matches_for_student,
    get_professional_matches,
    get_student_matches,
)
from mentorlink.storage.memory import MemoryStorage


class TestGenerateMatchesForStudent:
    def test_matches_every_scoring_professional(self, storage, add_student, add_professional):
        finance = add_professional(["Finance"], ["Mentoring"])
        legal = add_professional(["Legal"], ["Internship"])
        student = add_student(["Finance"], ["Mentoring"])

        created = asyncio.run(generate_matches_for_student(storage, student.id))

        assert len(created) == 1
        assert created[0].professional_id == finance.id
        assert created[0].student_id == student.id
        assert created[0].score == 100
        assert all(m.professional_id != legal.id for m in storage.matches.values())

    def test_partial_overlap_score_is_stored(self, storage, add_student, add_professional):
        add_professional(["Design"], ["Mentoring", "Internship"])
        student = add_student(["Design", "Sales"], ["Mentoring"])

        created = asyncio.run(generate_matches_for_student(storage, student.id))

        assert [m.score for m in created] == [50]

    def test_unknown_student_is_noop(self, storage, add_professional):
        add_professional(["Finance"], ["Mentoring"])

        created = asyncio.run(generate_matches_for_student(storage, "missing-id"))

        assert created == []
        assert storage.matches == {}

    def test_no_professionals(self, storage, add_student):
        student = add_student(["Finance"], ["Mentoring"])
        assert asyncio.run(generate_matches_for_student(storage, student.id)) == []

    def test_running_twice_duplicates_matches(self, storage, add_student, add_professional):
        professional = add_professional(["Finance"], ["Mentoring"])
        student = add_student(["Finance"], ["Mentoring"])

        asyncio.run(generate_matches_for_student(storage, student.id))
        asyncio.run(generate_matches_for_student(storage, student.id))

        matches = asyncio.run(storage.get_matches_for_student(student.id))
        assert len(matches) == 2
        assert {m.professional_id for m in matches} == {professional.id}


class TestGenerateMatchesForProfessional:
    def test_matches_every_scoring_student(self, storage, add_student, add_professional):
        finance_student = add_student(["Finance"], ["Mentoring"])
        add_student(["Legal"], ["Internship"])
        professional = add_professional(["Finance"], ["Mentoring"])

        created = asyncio.run(generate_matches_for_professional(storage, professional.id))

        assert len(created) == 1
        assert created[0].student_id == finance_student.id
        assert created[0].score == 100

    def test_existing_pair_is_not_duplicated(self, storage, add_student, add_professional):
        student = add_student(["Finance"], ["Mentoring"])
        professional = add_professional(["Finance"], ["Mentoring"])
        asyncio.run(storage.create_match(student.id, professional.id, 100))

        created = asyncio.run(generate_matches_for_professional(storage, professional.id))

        assert created == []
        assert len(storage.matches) == 1

    def test_running_twice_does_not_duplicate(self, storage, add_student, add_professional):
        add_student(["Finance"], ["Mentoring"])
        professional = add_professional(["Finance"], ["Mentoring"])

        asyncio.run(generate_matches_for_professional(storage, professional.id))
        asyncio.run(generate_matches_for_professional(storage, professional.id))

        assert len(storage.matches) == 1

    def test_other_professionals_matches_do_not_block(self, storage, add_student, add_professional):
        student = add_student(["Finance"], ["Mentoring"])
        other = add_professional(["Finance"], ["Mentoring"])
        asyncio.run(storage.create_match(student.id, other.id, 100))
        professional = add_professional(["Finance"], ["Internship"])

        created = asyncio.run(generate_matches_for_professional(storage, professional.id))

        assert [(m.student_id, m.score) for m in created] == [(student.id, 60)]

    def test_unknown_professional_is_noop(self, storage, add_student):
        add_student(["Finance"], ["Mentoring"])
        assert asyncio.run(generate_matches_for_professional(storage, "missing-id")) == []
        assert storage.matches == {}


class FailingStorage(MemoryStorage):
    """Raises on the Nth match insert."""

    def __init__(self, fail_on: int):
        super().__init__()
        self.fail_on = fail_on
        self.inserts = 0

    async def create_match(self, student_id, professional_id, score) -> Match:
        self.inserts += 1
        if self.inserts == self.fail_on:
            raise RuntimeError("database unavailable")
        return await super().create_match(student_id, professional_id, score)


class TestPersistenceFailure:
    @pytest.fixture
    def storage(self):
        return FailingStorage(fail_on=2)

    def test_error_propagates_and_stops_loop(self, storage, add_student, add_professional):
        for _ in range(4):
            add_professional(["Finance"], ["Mentoring"])
        student = add_student(["Finance"], ["Mentoring"])

        with pytest.raises(RuntimeError, match="database unavailable"):
            asyncio.run(generate_matches_for_student(storage, student.id))

        # First insert persisted, the rest never attempted
        assert len(storage.matches) == 1
        assert storage.inserts == 2

    def test_professional_path_stops_too(self, storage, add_student, add_professional):
        for _ in range(3):
            add_student(["Finance"], ["Mentoring"])
        professional = add_professional(["Finance"], ["Mentoring"])

        with pytest.raises(RuntimeError):
            asyncio.run(generate_matches_for_professional(storage, professional.id))

        assert len(storage.matches) == 1


class TestRetrieval:
    def test_student_matches_sorted_by_score(self, storage, add_student, add_professional):
        student = add_student(["Finance"], ["Mentoring"])
        pros = [add_professional(["Finance"], ["Mentoring"]) for _ in range(3)]
        for pro, score in zip(pros, [30, 90, 60]):
            asyncio.run(storage.create_match(student.id, pro.id, score))

        results = asyncio.run(get_student_matches(storage, student.id))

        assert [m.score for m in results] == [90, 60, 30]
        assert [m.professional.id for m in results] == [pros[1].id, pros[2].id, pros[0].id]

    def test_professional_matches_sorted_by_score(self, storage, add_student, add_professional):
        professional = add_professional(["Finance"], ["Mentoring"])
        students = [add_student(["Finance"], ["Mentoring"]) for _ in range(3)]
        for student, score in zip(students, [30, 90, 60]):
            asyncio.run(storage.create_match(student.id, professional.id, score))

        results = asyncio.run(get_professional_matches(storage, professional.id))

        assert [m.score for m in results] == [90, 60, 30]
        assert results[0].student.id == students[1].id

    def test_ties_keep_storage_order(self, storage, add_student, add_professional):
        student = add_student(["Finance"], ["Mentoring"])
        first = add_professional(["Finance"], ["Mentoring"])
        second = add_professional(["Finance"], ["Mentoring"])
        asyncio.run(storage.create_match(student.id, first.id, 50))
        asyncio.run(storage.create_match(student.id, second.id, 50))

        results = asyncio.run(get_student_matches(storage, student.id))

        assert [m.professional_id for m in results] == [first.id, second.id]

    def test_missing_counterpart_is_none(self, storage, add_student):
        student = add_student(["Finance"], ["Mentoring"])
        asyncio.run(storage.create_match(student.id, "gone", 40))

        results = asyncio.run(get_student_matches(storage, student.id))

        assert len(results) == 1
        assert results[0].professional is None

    def test_no_matches(self, storage):
        assert asyncio.run(get_student_matches(storage, "nobody")) == []
        assert asyncio.run(get_professional_matches(storage, "nobody")) == []
