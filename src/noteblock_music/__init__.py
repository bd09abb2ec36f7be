from noteblock_music.domain.errors import ScriptError
from noteblock_music.domain.events import (
    Clock,
    PlayAction,
    PlaybackSink,
    WaitAction,
)
from noteblock_music.domain.instructions import Instruction, Sequence, Sound
from noteblock_music.domain.instruments import (
    INSTRUMENT_ALIASES,
    Instrument,
    InstrumentResolver,
)
from noteblock_music.domain.notes import Note, parse_pitch
from noteblock_music.domain.parser import ScriptParser, compile_script
from noteblock_music.domain.player import RecordingSink, VirtualClock, actions, play

__version__ = '1.0.0'

__all__ = [
    'INSTRUMENT_ALIASES',
    'Clock',
    'Instruction',
    'Instrument',
    'InstrumentResolver',
    'Note',
    'PlayAction',
    'PlaybackSink',
    'RecordingSink',
    'ScriptError',
    'ScriptParser',
    'Sequence',
    'Sound',
    'VirtualClock',
    'WaitAction',
    'actions',
    'compile_script',
    'parse_pitch',
    'play',
]
