import logging
from collections.abc import Callable, Iterator

from typing_extensions import override

from noteblock_music.domain.events import (
    Clock,
    PlayAction,
    PlaybackAction,
    PlaybackSink,
    WaitAction,
)
from noteblock_music.domain.instructions import Instruction, Sequence, Sound
from noteblock_music.domain.instruments import Instrument

logger = logging.getLogger(__name__)


def never_cancel() -> bool:
    return False


def is_silent(node: Instruction) -> bool:
    """Indicar se tocar o nó não produz nenhuma ação (nem nota, nem espera)."""
    if node.fermata > 0:
        return False
    if node.restatement == 0:
        return True
    if isinstance(node, Sequence):
        body_silent = all(is_silent(child) for child in node.children)
        return body_silent and (node.restatement == 1 or node.restatement_delay == 0)
    return False


def actions(
    node: Instruction,
    should_cancel: Callable[[], bool] = never_cancel,
) -> Iterator[PlaybackAction]:
    """Percorrer a árvore em profundidade gerando as ações na ordem de execução.

    Cada filho termina suas repetições, atrasos e fermata antes do próximo
    irmão começar. O gerador é preguiçoso, então um número muito grande de
    repetições não é um problema. `should_cancel` é consultado no início de
    cada repetição; quando retorna True o gerador termina sem mais ações.
    """
    repeats = node.restatement
    if (
        isinstance(node, Sequence)
        and node.restatement_delay == 0
        and all(is_silent(child) for child in node.children)
    ):
        # Repetir um corpo silencioso não produz nada
        repeats = 0

    for iteration in range(repeats):
        if should_cancel():
            return

        if isinstance(node, Sound):
            yield PlayAction(node.sound_id, node.pitch, node.volume)
        elif isinstance(node, Sequence):
            for child in node.children:
                yield from actions(child, should_cancel)

        if iteration < repeats - 1 and node.restatement_delay > 0:
            yield WaitAction(node.restatement_delay)

    if node.fermata > 0 and not should_cancel():
        yield WaitAction(node.fermata)


def play(
    node: Instruction,
    sink: PlaybackSink,
    clock: Clock,
    on_action: Callable[[PlaybackAction], None] | None = None,
) -> bool:
    """Executar a árvore no `sink`, retornando False se for cancelada."""
    for action in actions(node, clock.should_cancel):
        if clock.should_cancel():
            logger.debug('Reprodução cancelada antes de %s', action)
            return False

        if on_action:
            on_action(action)

        match action:
            case PlayAction(sound_id, pitch, volume):
                sink.emit(sound_id, pitch, volume)
            case WaitAction(milliseconds):
                clock.wait(milliseconds)

    return not clock.should_cancel()


class RecordingSink(PlaybackSink):
    """Guarda as notas em memória, na ordem em que foram tocadas."""

    def __init__(self) -> None:
        self.events: list[PlayAction] = []

    @override
    def emit(self, sound_id: Instrument | None, pitch: float, volume: float) -> None:
        self.events.append(PlayAction(sound_id, pitch, volume))


class VirtualClock(Clock):
    """Relógio sem espera real: apenas acumula o tempo decorrido."""

    def __init__(self) -> None:
        self.elapsed_ms: int = 0
        self.waits: list[int] = []
        self.cancelled: bool = False

    @override
    def wait(self, milliseconds: int) -> None:
        self.waits.append(milliseconds)
        self.elapsed_ms += milliseconds

    @override
    def should_cancel(self) -> bool:
        return self.cancelled

    def cancel(self) -> None:
        self.cancelled = True
