import logging
from pathlib import Path

from midiutil import MIDIFile

from noteblock_music.config import PERCUSSION_CHANNEL
from noteblock_music.domain.events import PlayAction, WaitAction
from noteblock_music.domain.instructions import Instruction
from noteblock_music.domain.models import PlaybackSettings
from noteblock_music.domain.player import actions
from noteblock_music.infrastructure.gm_mapping import midi_key, midi_velocity, voice_for

logger = logging.getLogger(__name__)


class MIDIExporter:
    """Gera e salva um arquivo MIDI a partir de uma árvore compilada."""

    MELODIC_CHANNEL: int = 0

    def build(self, tree: Instruction, settings: PlaybackSettings) -> MIDIFile:
        """Percorrer as ações em uma linha do tempo virtual, sem esperas reais.

        Corpos silenciosos são pulados por `actions`, então toda repetição
        percorrida gera ao menos uma ação; o custo cresce com o número de
        notas e esperas do arquivo gerado.
        """
        midi = MIDIFile(1, deinterleave=False)

        track = 0
        midi.addTempo(track=track, time=0, tempo=settings.bpm)

        ms_per_beat = 60000.0 / max(1, settings.bpm)
        duration = settings.note_length_ms / ms_per_beat
        elapsed_ms = 0
        current_program: int | None = None
        note_count = 0

        for action in actions(tree):
            if isinstance(action, WaitAction):
                elapsed_ms += action.milliseconds
                continue

            if not isinstance(action, PlayAction) or action.sound_id is None:
                continue

            voice = voice_for(action.sound_id)
            time = elapsed_ms / ms_per_beat
            channel = self.MELODIC_CHANNEL

            if voice.percussion_key is not None:
                channel = PERCUSSION_CHANNEL
            elif voice.program != current_program:
                midi.addProgramChange(
                    tracknum=track,
                    channel=channel,
                    time=time,
                    program=voice.program,
                )
                current_program = voice.program

            midi.addNote(
                track=track,
                channel=channel,
                pitch=midi_key(action.pitch, voice),
                time=time,
                duration=duration,
                volume=midi_velocity(action.volume, settings.base_velocity),
            )
            note_count += 1

        logger.debug('MIDI gerado: %d notas em %d ms', note_count, elapsed_ms)
        return midi

    def save(
        self,
        tree: Instruction,
        file_path: Path,
        settings: PlaybackSettings,
    ) -> None:
        """Criar o objeto `MIDIFile` e o salvar no disco."""
        midi = self.build(tree, settings)

        with file_path.open('wb') as output_file:
            midi.writeFile(output_file)
