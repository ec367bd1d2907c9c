"""Tests for FileSaveGateway."""

import json

import pytest

from riddler.engine.session import RiddleLifecycle
from riddler.errors import CorruptSaveError, SaveNotFoundError, SaveWriteError
from riddler.models.metadata import Difficulty
from riddler.models.state import SAVE_FORMAT, GameState, SaveRecord
from riddler.persistence.save_gateway import FileSaveGateway, parse_save_record


@pytest.fixture
def save_path(tmp_path):
    return tmp_path / "saves" / "riddler_save.json"


@pytest.fixture
def state(draft_factory):
    """A mid-riddle game state with one hint used."""
    session = RiddleLifecycle.issue(draft_factory(), Difficulty.HARD)
    session, _ = RiddleLifecycle.request_hint(session)
    return GameState(
        game_id="game-1",
        state_version=4,
        total_score=35,
        difficulty=Difficulty.HARD,
        active_session=session,
    )


class TestFileSaveGateway:
    """Test suite for FileSaveGateway."""

    def test_creates_directory(self, save_path):
        """The save directory is created on init."""
        FileSaveGateway(save_path)
        assert save_path.parent.is_dir()

    def test_round_trip(self, save_path, state):
        """A saved record loads back as an equivalent state."""
        gateway = FileSaveGateway(save_path)
        gateway.save(SaveRecord.from_state(state))

        loaded = gateway.load()
        assert loaded.state == state
        assert loaded.state.active_session.riddle.hint == state.active_session.riddle.hint
        assert loaded.format == SAVE_FORMAT

    def test_no_temp_file_left(self, save_path, state):
        """Writes go through a temporary file that is renamed into place."""
        gateway = FileSaveGateway(save_path)
        gateway.save(SaveRecord.from_state(state))
        assert [p.name for p in save_path.parent.iterdir()] == [save_path.name]

    def test_load_missing(self, save_path):
        """A missing save file is reported as not found."""
        with pytest.raises(SaveNotFoundError):
            FileSaveGateway(save_path).load()

    def test_load_garbage(self, save_path):
        """Unparseable files are reported as corrupt."""
        gateway = FileSaveGateway(save_path)
        save_path.write_text("{\"format\": \"riddler-save\", ", encoding="utf-8")
        with pytest.raises(CorruptSaveError):
            gateway.load()

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda data: data.pop("state"),
            lambda data: data.update(format="other-game"),
            lambda data: data.update(version=99),
            lambda data: data["state"].update(total_score=-5),
            lambda data: data["state"].pop("game_id"),
            lambda data: data["state"]["active_session"].pop("riddle"),
            lambda data: data["state"]["active_session"].update(status="solved"),
            lambda data: data["state"]["active_session"].update(status="abandoned"),
        ],
    )
    def test_load_structurally_invalid(self, save_path, state, mutate):
        """Records missing fields or with wrong tags are reported as corrupt."""
        gateway = FileSaveGateway(save_path)
        gateway.save(SaveRecord.from_state(state))
        data = json.loads(save_path.read_text(encoding="utf-8"))
        mutate(data)
        save_path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(CorruptSaveError):
            gateway.load()

    def test_write_failure(self, save_path, state):
        """Write errors are reported as SaveWriteError."""
        gateway = FileSaveGateway(save_path)
        save_path.mkdir()  # A directory where the file should go
        with pytest.raises(SaveWriteError):
            gateway.save(SaveRecord.from_state(state))

    def test_exists_and_delete(self, save_path, state):
        """exists() and delete() reflect the file."""
        gateway = FileSaveGateway(save_path)
        assert gateway.exists() is False
        gateway.save(SaveRecord.from_state(state))
        assert gateway.exists() is True
        gateway.delete()
        assert gateway.exists() is False
        gateway.delete()  # Deleting twice is fine


class TestParseSaveRecord:
    """Validation of raw save data."""

    def test_accepts_json_and_dict(self, state):
        """Both JSON text and dicts are accepted."""
        record = SaveRecord.from_state(state)
        assert parse_save_record(record.model_dump_json()).state == state
        assert parse_save_record(record.model_dump(mode="json")).state == state
        assert parse_save_record(record) is record

    def test_rejects_non_record(self):
        """Anything that is not a save record is corrupt."""
        with pytest.raises(CorruptSaveError):
            parse_save_record([1, 2, 3])
        with pytest.raises(CorruptSaveError):
            parse_save_record({"state": {"game_id": "x"}, "unexpected": True})
