from collections.abc import Iterator
from dataclasses import dataclass

from noteblock_music.config import DEFAULT_VOLUME
from noteblock_music.domain.instruments import Instrument


@dataclass(frozen=True, kw_only=True)
class Instruction:
    """Classe base para todos os nós da árvore compilada.

    Os atrasos são em milissegundos. `restatement_delay` só é aplicado entre
    repetições, nunca depois da última; `fermata` é aplicada uma vez, depois
    de todas as repetições, mesmo quando `restatement` é 0.
    """

    restatement: int = 1
    restatement_delay: int = 0
    fermata: int = 0

    def depth(self) -> int:
        return 0


@dataclass(frozen=True, kw_only=True)
class Sound(Instruction):
    """Nota tocada por um instrumento (folha da árvore)."""

    sound_id: Instrument | None
    pitch: float
    volume: float = DEFAULT_VOLUME


@dataclass(frozen=True, kw_only=True)
class Sequence(Instruction):
    """Grupo de instruções tocadas em ordem; vazio é apenas uma pausa."""

    children: tuple[Instruction, ...] = ()

    def depth(self) -> int:
        """Quantidade máxima de grupos aninhados abaixo deste nó."""
        return max(
            (
                child.depth() + 1 if isinstance(child, Sequence) else 0
                for child in self.children
            ),
            default=0,
        )

    def sounds(self) -> Iterator[Sound]:
        """Percorrer as folhas na ordem do texto, sem considerar repetições."""
        for child in self.children:
            if isinstance(child, Sequence):
                yield from child.sounds()
            elif isinstance(child, Sound):
                yield child
