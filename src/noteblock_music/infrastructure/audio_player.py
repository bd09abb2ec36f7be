import logging
import threading

import fluidsynth
from typing_extensions import override

from noteblock_music.config import PERCUSSION_CHANNEL
from noteblock_music.domain.events import PlaybackSink
from noteblock_music.domain.instruments import Instrument
from noteblock_music.domain.models import PlaybackSettings
from noteblock_music.infrastructure.gm_mapping import midi_key, midi_velocity, voice_for

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class FluidSynthSink(PlaybackSink):
    """Toca as notas em tempo real usando fluidsynth."""

    MELODIC_CHANNEL: int = 0

    def __init__(self, settings: PlaybackSettings) -> None:
        self.settings: PlaybackSettings = settings
        self.fs: fluidsynth.Synth = fluidsynth.Synth()
        self.timers: list[threading.Timer] = []
        self.current_program: int | None = None
        self._initialize_fluidsynth()

    def _initialize_fluidsynth(self) -> None:
        self.fs.start()
        self.fs.sfload(str(self.settings.soundfont_path))
        logger.info('SoundFont carregado: %s', self.settings.soundfont_path)

    @override
    def emit(self, sound_id: Instrument | None, pitch: float, volume: float) -> None:
        if sound_id is None:
            return

        voice = voice_for(sound_id)
        key = midi_key(pitch, voice)
        velocity = midi_velocity(volume, self.settings.base_velocity)

        if voice.percussion_key is not None:
            channel = PERCUSSION_CHANNEL
        else:
            channel = self.MELODIC_CHANNEL
            if voice.program != self.current_program:
                self.fs.program_change(chan=channel, prg=voice.program)
                self.current_program = voice.program

        self.fs.noteon(chan=channel, key=key, vel=velocity)

        self.timers = [t for t in self.timers if t.is_alive()]

        timer = threading.Timer(
            self.settings.note_length_ms / 1000.0,
            self.fs.noteoff,
            args=[channel, key],
        )
        self.timers.append(timer)
        timer.start()

    def close(self, wait: bool = True) -> None:
        """Liberar o sintetizador, deixando as notas terminarem se `wait`."""
        for timer in self.timers:
            if wait:
                timer.join()
            else:
                timer.cancel()

        self.timers = []
        self.fs.delete()
