import logging
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

logger = logging.getLogger(__name__)


class Instrument(StrEnum):
    """Instrumentos disponíveis para os blocos musicais."""

    PIANO = 'PIANO'
    BASS_DRUM = 'BASS_DRUM'
    SNARE_DRUM = 'SNARE_DRUM'
    STICKS = 'STICKS'
    BASS_GUITAR = 'BASS_GUITAR'
    FLUTE = 'FLUTE'
    BELL = 'BELL'
    GUITAR = 'GUITAR'
    CHIME = 'CHIME'
    XYLOPHONE = 'XYLOPHONE'
    IRON_XYLOPHONE = 'IRON_XYLOPHONE'
    COW_BELL = 'COW_BELL'
    DIDGERIDOO = 'DIDGERIDOO'
    BIT = 'BIT'
    BANJO = 'BANJO'
    PLING = 'PLING'


def build_aliases() -> dict[str, Instrument]:
    """Gerar a tabela de atalhos: nome completo e uma abreviação por instrumento.

    A abreviação é a primeira letra mais a letra após o primeiro `_`
    (`BD` para `BASS_DRUM`). Em caso de colisão, as letras do nome são
    acrescentadas uma a uma (pulando cada `_` e a letra seguinte) até que o
    atalho fique livre. O primeiro instrumento a reivindicar um atalho o mantém.
    """
    aliases: dict[str, Instrument] = {}

    for instrument in Instrument:
        name = instrument.value
        aliases[name] = instrument

        alias = name[0]
        index = name.find('_')
        if index != -1:
            alias += name[index + 1]

        if aliases.setdefault(alias, instrument) is instrument:
            continue

        i = 0
        while i < len(name):
            char = name[i]
            if char == '_':
                i += 2
                continue

            alias += char
            if aliases.setdefault(alias, instrument) is instrument:
                break
            i += 1

    return aliases


INSTRUMENT_ALIASES: Mapping[str, Instrument] = MappingProxyType(build_aliases())


class InstrumentResolver:
    """Resolve nomes de instrumentos usando a tabela de atalhos."""

    def __init__(
        self,
        aliases: Mapping[str, Instrument] | None = None,
        extra_aliases: Mapping[str, Instrument] | None = None,
    ) -> None:
        table = dict(INSTRUMENT_ALIASES if aliases is None else aliases)
        if extra_aliases:
            table.update(extra_aliases)

        self.aliases: Mapping[str, Instrument] = MappingProxyType(
            {name.upper(): instrument for name, instrument in table.items()}
        )

    def resolve_instrument(self, name: str) -> Instrument | None:
        """Retorna o instrumento do atalho, ou None se não existir."""
        instrument = self.aliases.get(name.upper())
        if instrument is None:
            logger.warning('Instrumento desconhecido: %s', name)
        return instrument
