"""Tabela de transições do analisador de scripts.

O analisador lê um caractere por vez. A fase atual define qual campo está
sendo acumulado e quais caracteres são aceitos; os caracteres estruturais
`(`, `)`, espaço, `,` e `:` mudam a fase. Toda a decisão fica em
`transition`, uma função pura; o analisador apenas aplica a ação retornada.
"""

from enum import StrEnum
from typing import Final, NamedTuple


class Phase(StrEnum):
    NEUTRAL = 'neutral'
    INSTRUMENT = 'instrument'
    NOTE = 'note'
    END_OF_NESTED_SEQUENCE = 'end_of_nested_sequence'
    RESTATEMENT = 'restatement'
    RESTATEMENT_DELAY = 'restatement_delay'
    FERMATA = 'fermata'


class Field(StrEnum):
    """Buffers que acumulam o texto de cada parte de uma instrução."""

    INSTRUMENT = 'instrument'
    PITCH = 'pitch'
    VOLUME = 'volume'
    RESTATEMENT = 'restatement'
    RESTATEMENT_DELAY = 'restatement_delay'
    FERMATA = 'fermata'


class Action(StrEnum):
    PUSH = 'push'
    POP = 'pop'
    TERMINATE = 'terminate'
    PROVISIONAL_FERMATA = 'provisional_fermata'
    SEPARATE = 'separate'
    VOLUME = 'volume'
    START = 'start'
    APPEND = 'append'
    IGNORE = 'ignore'
    FAIL = 'fail'


class Step(NamedTuple):
    phase: Phase
    field: Field | None
    action: Action
    error: str | None = None


DIGITS: Final[frozenset[str]] = frozenset('0123456789')
LETTERS: Final[frozenset[str]] = frozenset('ABCDEFGHIJKLMNOPQRSTUVWXYZ')

FILTERS: Final[dict[Field, frozenset[str]]] = {
    Field.INSTRUMENT: LETTERS | {'_', '-'},
    Field.PITCH: frozenset('ABCDEFG#_') | DIGITS,
    Field.VOLUME: DIGITS | {'.'},
    Field.RESTATEMENT: DIGITS,
    Field.RESTATEMENT_DELAY: DIGITS,
    Field.FERMATA: DIGITS,
}

# Próxima fase e campo ao encontrar `,`
SEPARATORS: Final[dict[Phase, tuple[Phase, Field]]] = {
    Phase.INSTRUMENT: (Phase.NOTE, Field.PITCH),
    Phase.NOTE: (Phase.RESTATEMENT, Field.RESTATEMENT),
    Phase.END_OF_NESTED_SEQUENCE: (Phase.RESTATEMENT, Field.RESTATEMENT),
    Phase.RESTATEMENT: (Phase.RESTATEMENT_DELAY, Field.RESTATEMENT_DELAY),
}

# Fases em que uma nova instrução pode começar
OPENING_PHASES: Final[frozenset[Phase]] = frozenset(
    {Phase.NEUTRAL, Phase.RESTATEMENT, Phase.RESTATEMENT_DELAY, Phase.FERMATA}
)


def accepts(field: Field, char: str) -> bool:
    return char in FILTERS[field]


def _fail(phase: Phase, field: Field | None, message: str) -> Step:
    return Step(phase, field, Action.FAIL, message)


def transition(phase: Phase, field: Field | None, char: str) -> Step:
    """Calcular a próxima fase e a ação para um caractere já normalizado."""
    match char:
        case '(':
            if phase in OPENING_PHASES:
                return Step(Phase.NEUTRAL, None, Action.PUSH)
            return _fail(phase, field, "'(' inesperado")

        case ')':
            if phase is Phase.INSTRUMENT:
                return _fail(phase, field, 'instrução incompleta, falta a nota')
            return Step(Phase.END_OF_NESTED_SEQUENCE, None, Action.POP)

        case ' ':
            match phase:
                case Phase.NEUTRAL:
                    return Step(phase, field, Action.IGNORE)
                case Phase.FERMATA:
                    return Step(Phase.NEUTRAL, None, Action.TERMINATE)
                case Phase.INSTRUMENT:
                    return _fail(phase, field, 'instrução incompleta, falta a nota')
                case _:
                    return Step(Phase.FERMATA, Field.FERMATA, Action.PROVISIONAL_FERMATA)

        case ',':
            if phase in SEPARATORS:
                next_phase, next_field = SEPARATORS[phase]
                return Step(next_phase, next_field, Action.SEPARATE)
            return _fail(phase, field, "separador ',' inesperado")

        case ':':
            if phase is Phase.NOTE and field is Field.PITCH:
                return Step(phase, Field.VOLUME, Action.VOLUME)
            return _fail(phase, field, "separador ':' inesperado")

    if phase is Phase.NEUTRAL or (
        phase in OPENING_PHASES and accepts(Field.INSTRUMENT, char)
    ):
        if not accepts(Field.INSTRUMENT, char):
            return _fail(phase, field, f'caractere {char!r} inválido para instrument')
        return Step(Phase.INSTRUMENT, Field.INSTRUMENT, Action.START)

    if field is None:
        return _fail(phase, field, f'caractere {char!r} inesperado')

    if not accepts(field, char):
        return _fail(phase, field, f'caractere {char!r} inválido para {field}')

    return Step(phase, field, Action.APPEND)
