from pathlib import Path
from typing import Final, NamedTuple

# Caminho padrão para o SoundFont
DEFAULT_SOUNDFONT: Final[Path] = Path('FluidR3_GM.sf2')

# Volume usado quando a nota não informa `:VOLUME`
DEFAULT_VOLUME: Final[float] = 1.0

# Identificadores das notas naturais (a escala do bloco musical começa em F#)
TONE_IDS: Final[dict[str, int]] = {
    'G': 1,
    'A': 3,
    'B': 5,
    'C': 6,
    'D': 8,
    'E': 10,
    'F': 11,
}

SHARP: Final[str] = '#'
FLAT: Final[str] = '_'
SEMITONES_PER_OCTAVE: Final[int] = 12
MAX_OCTAVE: Final[int] = 2

# Tecla MIDI equivalente ao id 0 da escala (F#3)
NOTE_BLOCK_BASE_KEY: Final[int] = 54

# Valor máximo para dados MIDI (notas, volume, etc.)
MAX_MIDI_VALUE: Final[int] = 127

PERCUSSION_CHANNEL: Final[int] = 9

# Linhas de arquivos de script que começam com este prefixo são ignoradas
COMMENT_PREFIX: Final[str] = '#'


class GMVoice(NamedTuple):
    """Como um instrumento do bloco musical soa em um sintetizador General MIDI."""

    program: int
    transpose: int = 0
    percussion_key: int | None = None


# Mapeamento dos instrumentos para programas do General MIDI
GM_VOICES: Final[dict[str, GMVoice]] = {
    'PIANO': GMVoice(program=0),
    'BASS_DRUM': GMVoice(program=0, percussion_key=36),
    'SNARE_DRUM': GMVoice(program=0, percussion_key=38),
    'STICKS': GMVoice(program=0, percussion_key=75),
    'BASS_GUITAR': GMVoice(program=33, transpose=-24),
    'FLUTE': GMVoice(program=73, transpose=12),
    'BELL': GMVoice(program=9, transpose=24),
    'GUITAR': GMVoice(program=24, transpose=-12),
    'CHIME': GMVoice(program=14, transpose=24),
    'XYLOPHONE': GMVoice(program=13, transpose=24),
    'IRON_XYLOPHONE': GMVoice(program=11),
    'COW_BELL': GMVoice(program=0, percussion_key=56),
    'DIDGERIDOO': GMVoice(program=109, transpose=-24),
    'BIT': GMVoice(program=80),
    'BANJO': GMVoice(program=105),
    'PLING': GMVoice(program=4),
}

# Início de Megalovania (não perfeitamente afinado)
DEMO_SCRIPT: Final[str] = (
    'PIANO,D,2,100 PIANO,B#1 200 PIANO,F 250 PIANO,E 250 '
    'PIANO,B 200 PIANO,A 100 PIANO,B 100 PIANO,E'
)
