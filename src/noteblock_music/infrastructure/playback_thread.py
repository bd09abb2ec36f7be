import logging
import threading
from collections.abc import Callable

from typing_extensions import override

from noteblock_music.domain.events import Clock, PlaybackAction, PlaybackSink
from noteblock_music.domain.instructions import Sequence
from noteblock_music.domain.player import play

logger = logging.getLogger(__name__)


class EventClock(Clock):
    """Espera real que termina imediatamente quando o evento de parada é setado."""

    def __init__(self, stop_request: threading.Event) -> None:
        self._stop_request: threading.Event = stop_request

    @override
    def wait(self, milliseconds: int) -> None:
        _ = self._stop_request.wait(milliseconds / 1000.0)

    @override
    def should_cancel(self) -> bool:
        return self._stop_request.is_set()


class PlaybackThread(threading.Thread):
    """Executa um script compilado em uma thread separada."""

    def __init__(
        self,
        tree: Sequence,
        sink: PlaybackSink,
        on_finished_callback: Callable[[bool], None] | None = None,
        on_action_callback: Callable[[PlaybackAction], None] | None = None,
    ) -> None:
        super().__init__(daemon=True)
        self.tree: Sequence = tree
        self.sink: PlaybackSink = sink
        self._stop_request: threading.Event = threading.Event()
        self.clock: Clock = EventClock(self._stop_request)
        self.finished_callback: Callable[[bool], None] | None = on_finished_callback
        self.action_callback: Callable[[PlaybackAction], None] | None = (
            on_action_callback
        )
        self.completed: bool = False

    @override
    def run(self) -> None:
        logger.info('Reprodução iniciada')
        self.completed = play(
            self.tree, self.sink, self.clock, on_action=self.action_callback
        )

        if self.completed:
            logger.info('Reprodução concluída')
        else:
            logger.info('Reprodução interrompida')

        if self.finished_callback:
            self.finished_callback(self.completed)

    def stop(self) -> None:
        """Sinalizar a thread para parar."""
        self._stop_request.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop_request.is_set()
