import math

from noteblock_music.config import (
    GM_VOICES,
    MAX_MIDI_VALUE,
    NOTE_BLOCK_BASE_KEY,
    SEMITONES_PER_OCTAVE,
    GMVoice,
)
from noteblock_music.domain.instruments import Instrument


def voice_for(instrument: Instrument) -> GMVoice:
    return GM_VOICES.get(instrument.value, GMVoice(program=0))


def midi_key(pitch: float, voice: GMVoice) -> int:
    """Converter o pitch (1.0 = id 12 da escala) em uma tecla MIDI."""
    if voice.percussion_key is not None:
        return voice.percussion_key

    note_id = SEMITONES_PER_OCTAVE + round(SEMITONES_PER_OCTAVE * math.log2(pitch))
    key = NOTE_BLOCK_BASE_KEY + note_id + voice.transpose
    return max(0, min(MAX_MIDI_VALUE, key))


def midi_velocity(volume: float, base_velocity: int) -> int:
    return max(0, min(MAX_MIDI_VALUE, round(volume * base_velocity)))
