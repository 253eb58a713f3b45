from __future__ import annotations

from pathlib import Path

import pytest

from models.voice_models import MessageSettings, VoiceState, VoiceTable, VoiceType


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("MALE1", VoiceType.MALE1),
        ("female2", VoiceType.FEMALE2),
        (" child_female ", VoiceType.CHILD_FEMALE),
    ],
)
def test_voice_type_parse(value: str, expected: VoiceType) -> None:
    assert VoiceType.parse(value) is expected


def test_voice_type_parse_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown voice type 'robot'"):
        VoiceType.parse("robot")


def test_voice_table_get() -> None:
    table = VoiceTable(language="ja", voices={VoiceType.MALE1: "male1"})

    assert table.get(VoiceType.MALE1) == "male1"
    assert table.get(VoiceType.FEMALE1) is None


def test_message_settings_copy_is_independent() -> None:
    settings = MessageSettings(language="ja", voice_type=VoiceType.MALE1)
    snapshot: MessageSettings = settings.copy()

    settings.language = "en"

    assert snapshot.language == "ja"
    assert snapshot.voice_type is VoiceType.MALE1


def test_voice_state_str() -> None:
    state = VoiceState(language="ja", voice_id="mei", voice_path=Path("/voices/mei.htsvoice"))

    assert str(state) == "<VoiceState language: ja, voice_id: mei, voice_path: /voices/mei.htsvoice>"
