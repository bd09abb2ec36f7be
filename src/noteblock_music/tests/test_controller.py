import pytest

pytest.importorskip('fluidsynth')

from noteblock_music.application.controller import MusicController  # noqa: E402
from noteblock_music.config import DEMO_SCRIPT  # noqa: E402
from noteblock_music.domain.errors import ScriptError  # noqa: E402
from noteblock_music.domain.models import PlaybackSettings  # noqa: E402
from noteblock_music.domain.player import RecordingSink  # noqa: E402


def test_compile_and_load(tmp_path):
    controller = MusicController()
    path = tmp_path / 'song.txt'
    path.write_text('# demo\nPIANO,C\nPIANO,D 100\n', encoding='utf-8')

    assert controller.load(path) == controller.compile('PIANO,C PIANO,D 100')


def test_compile_errors_propagate():
    with pytest.raises(ScriptError):
        MusicController().compile('(PIANO,C')


def test_play_with_custom_sink():
    finished = []
    sink = RecordingSink()
    controller = MusicController()
    player = controller.play_music(
        'PIANO,C,2,1',
        PlaybackSettings(),
        sink=sink,
        on_finished_callback=finished.append,
    )
    player.join(timeout=5.0)

    assert finished == [True]
    assert len(sink.events) == 2


def test_starting_playback_stops_the_previous_one():
    controller = MusicController()
    first = controller.play_music(
        'PIANO,C 60000 PIANO,D', PlaybackSettings(), RecordingSink()
    )
    second = controller.play_demo(PlaybackSettings(), RecordingSink())

    assert not first.is_alive()
    assert not first.completed
    controller.stop_music()
    assert not second.is_alive()
    assert controller.current_player is None
    assert DEMO_SCRIPT.startswith('PIANO,D,2,100')


def test_export_midi(tmp_path):
    path = tmp_path / 'demo.mid'
    MusicController().export_midi(DEMO_SCRIPT, PlaybackSettings(), path)
    assert path.read_bytes().startswith(b'MThd')
