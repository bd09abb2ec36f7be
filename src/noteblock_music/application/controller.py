import logging
from collections.abc import Callable
from pathlib import Path

from noteblock_music.config import DEMO_SCRIPT
from noteblock_music.domain.events import PlaybackAction, PlaybackSink
from noteblock_music.domain.instructions import Sequence
from noteblock_music.domain.instruments import InstrumentResolver
from noteblock_music.domain.models import PlaybackSettings
from noteblock_music.domain.parser import ScriptParser
from noteblock_music.infrastructure.audio_player import FluidSynthSink
from noteblock_music.infrastructure.midi_exporter import MIDIExporter
from noteblock_music.infrastructure.playback_thread import PlaybackThread
from noteblock_music.infrastructure.script_loader import load_script

logger = logging.getLogger(__name__)


class MusicController:
    def __init__(self, resolver: InstrumentResolver | None = None) -> None:
        self.parser: ScriptParser = ScriptParser(resolver)
        self.exporter: MIDIExporter = MIDIExporter()
        self.current_player: PlaybackThread | None = None

    def compile(self, text: str) -> Sequence:
        return self.parser.parse(text)

    def load(self, file_path: Path) -> Sequence:
        """Ler e compilar um script salvo em arquivo."""
        return self.compile(load_script(file_path))

    def play_music(
        self,
        text: str,
        settings: PlaybackSettings,
        sink: PlaybackSink | None = None,
        on_finished_callback: Callable[[bool], None] | None = None,
        on_action_callback: Callable[[PlaybackAction], None] | None = None,
    ) -> PlaybackThread:
        """Compila o texto e inicia a reprodução em uma nova thread."""
        self.stop_music()

        tree = self.compile(text)
        owned_sink = sink is None
        player_sink: PlaybackSink = sink or FluidSynthSink(settings)

        def finished(completed: bool) -> None:
            if owned_sink and isinstance(player_sink, FluidSynthSink):
                player_sink.close(wait=completed)
            if on_finished_callback:
                on_finished_callback(completed)

        self.current_player = PlaybackThread(
            tree=tree,
            sink=player_sink,
            on_finished_callback=finished,
            on_action_callback=on_action_callback,
        )
        self.current_player.start()
        return self.current_player

    def play_demo(
        self, settings: PlaybackSettings, sink: PlaybackSink | None = None
    ) -> PlaybackThread:
        return self.play_music(DEMO_SCRIPT, settings, sink)

    def stop_music(self) -> None:
        """Para a reprodução atual se estiver ativa."""
        if self.current_player and self.current_player.is_alive():
            self.current_player.stop()
            self.current_player.join(timeout=1.0)
        self.current_player = None

    def export_midi(
        self,
        text: str,
        settings: PlaybackSettings,
        file_path: Path,
    ) -> None:
        """Compila o texto e exporta para arquivo MIDI."""
        tree = self.compile(text)
        self.exporter.save(tree=tree, file_path=file_path, settings=settings)
        logger.info('MIDI exportado: %s', file_path.name)
