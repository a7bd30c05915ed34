"""Unit tests for the candidate save sequence"""

import pytest
from datetime import date
from unittest.mock import AsyncMock

from backend.app.core.exceptions import (
    ConnectivityException,
    DuplicateException,
    NotFoundException,
    StorageException,
    ValidationErrorKind,
    ValidationException,
)
from backend.app.models import Candidate, Education, Resume, WorkExperience
from backend.app.repositories import (
    CandidateRepository,
    EducationRepository,
    ResumeRepository,
    WorkExperienceRepository,
)
from backend.app.repositories.errors import STORAGE_ERROR_MESSAGES, StorageErrorCode
from backend.app.services.candidate_service import CandidateService
from tests.factories import (
    make_candidate_data,
    make_education,
    make_experience,
    make_invalid_candidate_data,
    make_minimal_candidate_data,
)


class RecordingRepositories:
    """Mock repositories that record every write in one ordered log"""

    def __init__(self, candidate_id: int = 1):
        self.writes = []
        self.candidate_id = candidate_id

        self.candidate = AsyncMock(spec=CandidateRepository)
        self.education = AsyncMock(spec=EducationRepository)
        self.work_experience = AsyncMock(spec=WorkExperienceRepository)
        self.resume = AsyncMock(spec=ResumeRepository)

        self.candidate.create.side_effect = self._create_candidate
        self.candidate.update.side_effect = self._update_candidate
        self.education.create.side_effect = self._recorder("education", Education)
        self.work_experience.create.side_effect = self._recorder("work_experience", WorkExperience)
        self.resume.create.side_effect = self._recorder("resume", Resume)

    def _create_candidate(self, data):
        self.writes.append(("candidate", data))
        return Candidate(id=self.candidate_id, **data)

    def _update_candidate(self, candidate_id, data):
        self.writes.append(("candidate_update", data))
        stored = {
            "first_name": "Stored",
            "last_name": "Candidate",
            "email": "stored@example.com",
        }
        stored.update(data)
        return Candidate(id=candidate_id, **stored)

    def _recorder(self, name, model):
        def create(data):
            self.writes.append((name, data))
            return model(id=len(self.writes), **data)
        return create

    @property
    def write_order(self):
        return [name for name, _ in self.writes]

    def service(self) -> CandidateService:
        return CandidateService(self.candidate, self.education, self.work_experience, self.resume)


@pytest.fixture
def repos():
    return RecordingRepositories(candidate_id=1)


class TestAddCandidate:
    """Unit tests for CandidateService.add_candidate"""

    async def test_saves_candidate_then_each_dependent_in_order(self, repos):
        result = await repos.service().add_candidate(make_candidate_data())

        assert repos.write_order == ["candidate", "education", "work_experience", "resume"]
        for name, data in repos.writes[1:]:
            assert data["candidate_id"] == 1, name

        assert result.id == 1
        assert result.first_name == "Juan"
        assert [e.candidate_id for e in result.educations] == [1]
        assert [w.candidate_id for w in result.work_experiences] == [1]
        assert [r.candidate_id for r in result.resumes] == [1]

    async def test_maps_submission_fields_to_columns(self, repos):
        await repos.service().add_candidate(make_candidate_data())

        _, candidate = repos.writes[0]
        assert candidate == {
            "first_name": "Juan",
            "last_name": "Pérez",
            "email": "juan.perez@example.com",
            "phone": "612345678",
            "address": "Calle Mayor 123, Madrid",
        }

        _, education = repos.writes[1]
        assert education["start_date"] == date(2018, 9, 1)
        assert education["end_date"] == date(2022, 6, 30)

        _, experience = repos.writes[2]
        assert experience["end_date"] is None
        assert experience["position"] == "Desarrollador Full Stack"

        _, resume = repos.writes[3]
        assert resume == {
            "file_path": "/uploads/cv_juan_perez.pdf",
            "file_type": "application/pdf",
            "candidate_id": 1,
        }

    async def test_minimal_candidate_has_no_dependents(self, repos):
        result = await repos.service().add_candidate(make_minimal_candidate_data())

        assert repos.write_order == ["candidate"]
        _, candidate = repos.writes[0]
        assert candidate["phone"] is None
        assert candidate["address"] is None
        assert result.educations == []
        assert result.work_experiences == []
        assert result.resumes == []

    async def test_multiple_entries_saved_in_array_order(self, repos):
        data = make_candidate_data(
            educations=[make_education(institution="First"), make_education(institution="Second")],
            workExperiences=[make_experience(company="Alpha"), make_experience(company="Beta")],
            cv={},
        )

        result = await repos.service().add_candidate(data)

        assert repos.write_order == [
            "candidate", "education", "education", "work_experience", "work_experience"
        ]
        assert [e.institution for e in result.educations] == ["First", "Second"]
        assert [w.company for w in result.work_experiences] == ["Alpha", "Beta"]
        assert result.resumes == []

    async def test_validation_failure_touches_no_storage(self, repos):
        with pytest.raises(ValidationException) as exc_info:
            await repos.service().add_candidate(make_candidate_data(email="invalid-email"))

        assert exc_info.value.kind == ValidationErrorKind.INVALID_EMAIL
        repos.candidate.create.assert_not_awaited()
        repos.education.create.assert_not_awaited()
        assert repos.writes == []

    async def test_invalid_nested_entry_touches_no_storage(self, repos):
        data = make_candidate_data(workExperiences=[make_experience(description="A" * 201)])

        with pytest.raises(ValidationException):
            await repos.service().add_candidate(data)

        assert repos.writes == []

    async def test_edit_updates_existing_candidate(self, repos):
        data = make_invalid_candidate_data(id=7)
        del data["lastName"]

        result = await repos.service().add_candidate(data)

        repos.candidate.create.assert_not_awaited()
        repos.candidate.update.assert_awaited_once()
        candidate_id, fields = repos.candidate.update.await_args.args
        assert candidate_id == 7
        assert "last_name" not in fields
        assert fields["first_name"] == "123"
        assert result.id == 7
        assert result.last_name == "Candidate"

    async def test_duplicate_email_on_candidate_aborts(self, repos):
        message = STORAGE_ERROR_MESSAGES[StorageErrorCode.UNIQUE_VIOLATION]
        repos.candidate.create.side_effect = DuplicateException(message)

        with pytest.raises(DuplicateException) as exc_info:
            await repos.service().add_candidate(make_candidate_data())

        assert str(exc_info.value) == "The email already exists in the database"
        repos.education.create.assert_not_awaited()
        repos.work_experience.create.assert_not_awaited()
        repos.resume.create.assert_not_awaited()

    async def test_connectivity_failure_propagates(self, repos):
        message = STORAGE_ERROR_MESSAGES[StorageErrorCode.CONNECTIVITY]
        repos.candidate.create.side_effect = ConnectivityException(message)

        with pytest.raises(ConnectivityException) as exc_info:
            await repos.service().add_candidate(make_minimal_candidate_data())

        assert exc_info.value.message == message

    async def test_edit_of_missing_candidate_propagates_not_found(self, repos):
        message = STORAGE_ERROR_MESSAGES[StorageErrorCode.NOT_FOUND]
        repos.candidate.update.side_effect = NotFoundException(message)

        with pytest.raises(NotFoundException):
            await repos.service().add_candidate(make_candidate_data(id=999))

        repos.education.create.assert_not_awaited()

    async def test_other_storage_errors_pass_through(self, repos):
        repos.candidate.create.side_effect = StorageException("Database connection failed")

        with pytest.raises(StorageException, match="^Database connection failed$"):
            await repos.service().add_candidate(make_candidate_data())


class TestPartialWrites:
    """A failing dependent write stops the sequence without undoing earlier writes"""

    async def test_education_failure(self, repos):
        repos.education.create.side_effect = StorageException("Database error on education save")

        with pytest.raises(StorageException) as exc_info:
            await repos.service().add_candidate(make_candidate_data())

        assert exc_info.value.message == "Database error on education save"
        assert repos.write_order == ["candidate"]
        repos.education.create.assert_awaited_once()
        repos.work_experience.create.assert_not_awaited()
        repos.resume.create.assert_not_awaited()

    async def test_work_experience_failure(self, repos):
        repos.work_experience.create.side_effect = StorageException(
            "Database error on work experience save"
        )

        with pytest.raises(StorageException, match="work experience"):
            await repos.service().add_candidate(make_candidate_data())

        assert repos.write_order == ["candidate", "education"]
        repos.work_experience.create.assert_awaited_once()
        repos.resume.create.assert_not_awaited()

    async def test_resume_failure(self, repos):
        repos.resume.create.side_effect = StorageException("Database error on CV save")

        with pytest.raises(StorageException, match="CV save"):
            await repos.service().add_candidate(make_candidate_data())

        assert repos.write_order == ["candidate", "education", "work_experience"]
        repos.resume.create.assert_awaited_once()

    async def test_second_education_failure_stops_loop(self, repos):
        saved = Education(
            id=10,
            institution="First",
            title="Grado",
            start_date=date(2018, 9, 1),
            end_date=None,
            candidate_id=1,
        )
        repos.education.create.side_effect = [saved, StorageException("boom")]
        data = make_candidate_data(
            educations=[
                make_education(institution="First"),
                make_education(institution="Second"),
                make_education(institution="Third"),
            ]
        )

        with pytest.raises(StorageException, match="boom"):
            await repos.service().add_candidate(data)

        assert repos.education.create.await_count == 2
        repos.work_experience.create.assert_not_awaited()

    async def test_edit_with_impossible_date(self, repos):
        data = {
            "id": 5,
            "educations": [{"institution": "X", "title": "Y", "startDate": "2023-02-30"}],
            "workExperiences": [make_experience()],
        }

        with pytest.raises(StorageException) as exc_info:
            await repos.service().add_candidate(data)

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.message == str(exc_info.value.__cause__)
        assert repos.write_order == ["candidate_update"]
        repos.education.create.assert_not_awaited()
        repos.work_experience.create.assert_not_awaited()

    async def test_edit_with_non_string_date(self, repos):
        data = {"id": 5, "workExperiences": [make_experience(endDate=20230101)]}

        with pytest.raises(StorageException) as exc_info:
            await repos.service().add_candidate(data)

        assert isinstance(exc_info.value.__cause__, TypeError)
        repos.work_experience.create.assert_not_awaited()

    async def test_unexpected_errors_are_not_wrapped(self, repos):
        error = RuntimeError("driver crashed")
        repos.resume.create.side_effect = error

        with pytest.raises(RuntimeError) as exc_info:
            await repos.service().add_candidate(make_candidate_data())

        assert exc_info.value is error


class TestGetCandidate:
    """Unit tests for CandidateService.get_candidate"""

    async def test_returns_aggregate(self, repos):
        candidate = Candidate(
            id=3,
            first_name="Ana",
            last_name="García",
            email="ana@example.com",
            phone=None,
            address=None,
        )
        candidate.educations = [
            Education(
                id=1,
                institution="Universidad",
                title="Grado",
                start_date=date(2015, 9, 1),
                end_date=None,
                candidate_id=3,
            )
        ]
        candidate.work_experiences = []
        candidate.resumes = []
        repos.candidate.get_by_id.return_value = candidate

        result = await repos.service().get_candidate(3)

        repos.candidate.get_by_id.assert_awaited_once_with(3)
        assert result.id == 3
        assert result.educations[0].institution == "Universidad"
        assert result.model_dump(by_alias=True)["educations"][0]["candidateId"] == 3

    async def test_missing_candidate(self, repos):
        repos.candidate.get_by_id.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            await repos.service().get_candidate(404)

        assert exc_info.value.status_code == 404
