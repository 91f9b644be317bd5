"""
Noteful Backend — Note Service Unit Tests
===========================================

What:  Tests for NoteService request-handling logic.
How:   Uses a mocked repository and a recording sanitizer (no database, no HTTP).

What we test:
    ✅ resolve_note is the one lookup behind get, delete and update
    ✅ Create validation is fail-fast in declaration order, presence before types
    ✅ Ids the integer column cannot hold are absent without a query
    ✅ Writes are committed before the service returns
    ✅ Partial update passes only supplied fields to the repository
    ✅ Only name and content go through the sanitizer
    ✅ Storage failures surface as StorageError without being inspected
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import call

from sqlalchemy.exc import IntegrityError, OperationalError

from noteful.exceptions import NotFoundError, StorageError, ValidationError
from noteful.models.note import Note
from noteful.schemas.note import INT4_MAX, NoteCreate, NoteUpdate
from noteful.services.note_service import NoteService
from noteful.services.sanitizer import Sanitizer


class RecordingSanitizer(Sanitizer):
    """Marks sanitized text and remembers every input."""

    def __init__(self):
        self.seen = []

    def sanitize(self, text: str) -> str:
        self.seen.append(text)
        return f"clean({text})"


@pytest.fixture
def recording_sanitizer():
    return RecordingSanitizer()


@pytest.fixture
def service(mock_repository, recording_sanitizer):
    return NoteService(repository=mock_repository, sanitizer=recording_sanitizer)


def full_create_body(**overrides) -> dict:
    values = {
        "id": 7,
        "name": "Groceries",
        "modified": datetime(2019, 1, 3),
        "folder_id": 2,
        "content": "Milk, eggs",
    }
    values.update(overrides)
    return values


class TestSerialize:

    def test_sanitizes_name_and_content_only(self, service, recording_sanitizer, sample_note):
        result = service.serialize(sample_note)

        assert recording_sanitizer.seen == [sample_note.name, sample_note.content]
        assert result.name == f"clean({sample_note.name})"
        assert result.content == f"clean({sample_note.content})"
        assert result.id == sample_note.id
        assert result.folder_id == sample_note.folder_id
        assert result.modified == sample_note.modified


class TestResolveAndGet:

    @pytest.mark.asyncio
    async def test_get_note_found(self, service, mock_repository, sample_note):
        mock_repository.get_by_id.return_value = sample_note

        result = await service.get_note(sample_note.id)

        mock_repository.get_by_id.assert_awaited_once_with(sample_note.id)
        assert result.id == sample_note.id

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, service, mock_repository):
        mock_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_note(112233)

        assert exc_info.value.message == "Note doesn't exist"
        assert exc_info.value.context["resource_id"] == "112233"

    @pytest.mark.asyncio
    async def test_lookup_failure_is_storage_error(self, service, mock_repository):
        mock_repository.get_by_id.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(StorageError) as exc_info:
            await service.get_note(1)

        assert exc_info.value.context["original_error"] == "OperationalError"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", [INT4_MAX + 1, -(2 ** 31) - 1, 2 ** 63])
    async def test_id_outside_integer_column_is_not_found(self, service, mock_repository, note_id):
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_note(note_id)

        assert exc_info.value.message == "Note doesn't exist"
        mock_repository.get_by_id.assert_not_awaited()


class TestListNotes:

    @pytest.mark.asyncio
    async def test_list_empty(self, service, mock_repository):
        mock_repository.list_all.return_value = []

        assert await service.list_notes() == []

    @pytest.mark.asyncio
    async def test_list_serializes_every_note(self, service, mock_repository, sample_note):
        other = Note(id=2, name="b", modified=datetime(2020, 1, 1), folder_id=3, content="c")
        mock_repository.list_all.return_value = [sample_note, other]

        result = await service.list_notes()

        assert [note.id for note in result] == [sample_note.id, 2]
        assert result[1].name == "clean(b)"


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_inserts_all_fields(self, service, mock_repository):
        body = full_create_body()
        mock_repository.insert.side_effect = lambda fields: Note(**fields)

        result = await service.create_note(body)

        mock_repository.insert.assert_awaited_once_with(NoteCreate(**body).as_fields())
        mock_repository.commit.assert_awaited_once()
        assert result.id == 7
        assert result.name == "clean(Groceries)"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "missing, expected",
        [
            (["id", "name"], "id"),
            (["name", "content"], "name"),
            (["modified", "folder_id"], "modified"),
            (["folder_id", "content"], "folder_id"),
            (["content"], "content"),
        ],
    )
    async def test_reports_first_missing_field_in_declaration_order(
        self, service, mock_repository, missing, expected
    ):
        body = full_create_body(**{field: None for field in missing})

        with pytest.raises(ValidationError) as exc_info:
            await service.create_note(body)

        assert exc_info.value.message == f"Missing '{expected}' in request body"
        assert exc_info.value.field == expected
        mock_repository.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_body_reports_id(self, service):
        with pytest.raises(ValidationError, match="Missing 'id' in request body"):
            await service.create_note(None)

    @pytest.mark.asyncio
    async def test_insert_failure_is_storage_error(self, service, mock_repository):
        mock_repository.insert.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

        with pytest.raises(StorageError) as exc_info:
            await service.create_note(full_create_body())

        assert exc_info.value.context["original_error"] == "IntegrityError"

    @pytest.mark.asyncio
    async def test_missing_field_is_reported_before_invalid_type(self, service, mock_repository):
        body = full_create_body(folder_id="abc")
        del body["id"]

        with pytest.raises(ValidationError) as exc_info:
            await service.create_note(body)

        assert exc_info.value.message == "Missing 'id' in request body"
        mock_repository.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_type_once_all_fields_present(self, service, mock_repository):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_note(full_create_body(folder_id="abc"))

        assert exc_info.value.field == "folder_id"
        assert exc_info.value.message.startswith("Invalid 'folder_id' in request body: ")
        mock_repository.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_id_outside_integer_column_is_rejected(self, service, mock_repository):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_note(full_create_body(id=INT4_MAX + 1))

        assert exc_info.value.field == "id"
        mock_repository.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_now_keyword_is_current_utc_time(self, service, mock_repository):
        mock_repository.insert.side_effect = lambda fields: Note(**fields)
        before = datetime.now(timezone.utc)

        await service.create_note(full_create_body(modified="now"))

        modified = mock_repository.insert.await_args.args[0]["modified"]
        assert modified.tzinfo is not None
        assert before <= modified <= datetime.now(timezone.utc)

    @pytest.mark.asyncio
    async def test_commit_failure_is_storage_error(self, service, mock_repository):
        mock_repository.insert.side_effect = lambda fields: Note(**fields)
        mock_repository.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk full"))

        with pytest.raises(StorageError) as exc_info:
            await service.create_note(full_create_body())

        assert exc_info.value.context["original_error"] == "OperationalError"


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_deletes_existing_note(self, service, mock_repository, sample_note):
        mock_repository.get_by_id.return_value = sample_note
        mock_repository.delete_by_id.return_value = 1

        await service.delete_note(sample_note.id)

        mock_repository.delete_by_id.assert_awaited_once_with(sample_note.id)
        mock_repository.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_note_is_not_deleted(self, service, mock_repository):
        mock_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.delete_note(5)

        mock_repository.delete_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_row_vanishing_before_delete_is_not_found(
        self, service, mock_repository, sample_note
    ):
        mock_repository.get_by_id.return_value = sample_note
        mock_repository.delete_by_id.return_value = 0

        with pytest.raises(NotFoundError):
            await service.delete_note(sample_note.id)

        mock_repository.commit.assert_not_awaited()


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_passes_only_supplied_fields(self, service, mock_repository, sample_note):
        mock_repository.get_by_id.return_value = sample_note
        mock_repository.update_by_id.return_value = 1

        await service.update_note(sample_note.id, NoteUpdate(name="Renamed"))

        assert mock_repository.update_by_id.await_args == call(sample_note.id, {"name": "Renamed"})
        mock_repository.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_string_and_zero_are_supplied(self, service, mock_repository, sample_note):
        mock_repository.get_by_id.return_value = sample_note
        mock_repository.update_by_id.return_value = 1

        await service.update_note(sample_note.id, NoteUpdate(content="", folder_id=0))

        mock_repository.update_by_id.assert_awaited_once_with(
            sample_note.id, {"content": "", "folder_id": 0}
        )

    @pytest.mark.asyncio
    async def test_nothing_supplied_is_validation_error(self, service, mock_repository, sample_note):
        mock_repository.get_by_id.return_value = sample_note

        with pytest.raises(ValidationError) as exc_info:
            await service.update_note(sample_note.id, NoteUpdate(name=None))

        assert exc_info.value.message == (
            "Request body must contain either 'name', 'modified', 'folder_id', or 'content'"
        )
        mock_repository.update_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_runs_before_validation(self, service, mock_repository):
        mock_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.update_note(3, None)

    @pytest.mark.asyncio
    async def test_update_failure_is_storage_error(self, service, mock_repository, sample_note):
        mock_repository.get_by_id.return_value = sample_note
        mock_repository.update_by_id.side_effect = OperationalError("UPDATE", {}, Exception("locked"))

        with pytest.raises(StorageError):
            await service.update_note(sample_note.id, NoteUpdate(name="x"))

    @pytest.mark.asyncio
    async def test_commit_failure_is_storage_error(self, service, mock_repository, sample_note):
        mock_repository.get_by_id.return_value = sample_note
        mock_repository.update_by_id.return_value = 1
        mock_repository.commit.side_effect = OperationalError("COMMIT", {}, Exception("locked"))

        with pytest.raises(StorageError):
            await service.update_note(sample_note.id, NoteUpdate(name="x"))
