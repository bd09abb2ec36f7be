from dataclasses import dataclass
from pathlib import Path

from noteblock_music.config import DEFAULT_SOUNDFONT


@dataclass
class PlaybackSettings:
    """Configuração de reprodução e exportação definida pelo usuário."""

    soundfont_path: Path = DEFAULT_SOUNDFONT
    note_length_ms: int = 250
    base_velocity: int = 100
    bpm: int = 120
