import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Self

from noteblock_music.config import (
    FLAT,
    MAX_OCTAVE,
    SEMITONES_PER_OCTAVE,
    SHARP,
    TONE_IDS,
)

PITCH_REGEX: Final[re.Pattern[str]] = re.compile(
    r"""
    (?P<tone>[A-G])         # Nota: A-G
    (?P<accidental>[\#_])?  # Sustenido (#) ou bemol (_)
    (?P<octave>\d)?         # Oitava: 0, 1 ou 2
    """,
    re.VERBOSE | re.IGNORECASE,
)


class Accidental(StrEnum):
    NATURAL = ''
    SHARP = SHARP
    FLAT = FLAT


@dataclass(frozen=True)
class Note:
    """Nota do bloco musical já resolvida para o seu id na escala de duas oitavas."""

    tone: str
    accidental: Accidental
    octave: int

    @classmethod
    def parse(cls, token: str) -> Self | None:
        """Interpretar `<letra>[acidente][oitava]`; retorna None se malformado."""
        match = PITCH_REGEX.fullmatch(token)
        if not match:
            return None

        octave = int(match.group('octave') or 0)
        if octave > MAX_OCTAVE:
            octave = 0

        return cls(
            tone=match.group('tone').upper(),
            accidental=Accidental(match.group('accidental') or ''),
            octave=octave,
        )

    @property
    def id(self) -> int:
        tone_id = TONE_IDS[self.tone]
        match self.accidental:
            case Accidental.SHARP:
                tone_id += 1
            case Accidental.FLAT:
                tone_id -= 1

        return self.octave * SEMITONES_PER_OCTAVE + tone_id % SEMITONES_PER_OCTAVE

    @property
    def pitch(self) -> float:
        # 1.0 no meio da escala (id 12), dobra a cada oitava
        return 2.0 ** ((self.id - SEMITONES_PER_OCTAVE) / SEMITONES_PER_OCTAVE)


def parse_pitch(token: str) -> float | None:
    """Converter um token de altura no valor de pitch usado na reprodução."""
    note = Note.parse(token)
    return note.pitch if note else None
