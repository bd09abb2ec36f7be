from abc import ABC, abstractmethod
from dataclasses import dataclass

from noteblock_music.domain.instruments import Instrument


@dataclass(frozen=True)
class PlayAction:
    """Tocar uma nota uma vez."""

    sound_id: Instrument | None
    pitch: float
    volume: float


@dataclass(frozen=True)
class WaitAction:
    """Aguardar antes da próxima ação."""

    milliseconds: int


PlaybackAction = PlayAction | WaitAction


class PlaybackSink(ABC):
    """Destino das notas produzidas pela reprodução."""

    @abstractmethod
    def emit(self, sound_id: Instrument | None, pitch: float, volume: float) -> None:
        """Tocar a nota; `sound_id` None deve ser ignorado silenciosamente."""


class Clock(ABC):
    """Espera cancelável usada entre as notas."""

    @abstractmethod
    def wait(self, milliseconds: int) -> None:
        """Bloquear pela duração indicada ou até o cancelamento."""

    @abstractmethod
    def should_cancel(self) -> bool:
        """Indicar se a reprodução deve ser interrompida."""
