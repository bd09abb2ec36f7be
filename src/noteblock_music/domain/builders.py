from collections.abc import Iterable

from noteblock_music.config import DEFAULT_VOLUME
from noteblock_music.domain.errors import FieldError
from noteblock_music.domain.instructions import Instruction, Sequence, Sound
from noteblock_music.domain.instruments import InstrumentResolver
from noteblock_music.domain.notes import parse_pitch
from noteblock_music.domain.phases import Field


def to_int(value: str, field: Field, default: int) -> int:
    value = value.strip()
    if not value:
        return default
    if not value.isascii() or not value.isdigit():
        raise FieldError(field, f'{field} não numérico: {value!r}')
    return int(value)


def to_float(value: str, field: Field, default: float) -> float:
    value = value.strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise FieldError(field, f'{field} não numérico: {value!r}') from None


def build_sound(
    instrument: str,
    pitch: str,
    volume: str,
    restatement: str,
    restatement_delay: str,
    fermata: str,
    resolver: InstrumentResolver,
    default_volume: float = DEFAULT_VOLUME,
) -> Sound:
    """Criar uma nota a partir do conteúdo dos buffers do analisador."""
    pitch = pitch.strip()
    if not pitch:
        raise FieldError(Field.PITCH, 'falta a nota')

    pitch_value = parse_pitch(pitch)
    if pitch_value is None:
        raise FieldError(Field.PITCH, f'nota inválida: {pitch!r}')

    return Sound(
        sound_id=resolver.resolve_instrument(instrument.strip()),
        pitch=pitch_value,
        volume=to_float(volume, Field.VOLUME, default_volume),
        restatement=to_int(restatement, Field.RESTATEMENT, 1),
        restatement_delay=to_int(restatement_delay, Field.RESTATEMENT_DELAY, 0),
        fermata=to_int(fermata, Field.FERMATA, 0),
    )


def build_sequence(
    children: Iterable[Instruction],
    restatement: str,
    restatement_delay: str,
    fermata: str,
) -> Sequence:
    """Criar um grupo reaproveitando os filhos já compilados."""
    return Sequence(
        children=tuple(children),
        restatement=to_int(restatement, Field.RESTATEMENT, 1),
        restatement_delay=to_int(restatement_delay, Field.RESTATEMENT_DELAY, 0),
        fermata=to_int(fermata, Field.FERMATA, 0),
    )


def attach(children: list[Instruction], node: Instruction) -> Instruction:
    children.append(node)
    return node
