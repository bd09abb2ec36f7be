import logging
from dataclasses import dataclass, field

from noteblock_music.config import DEFAULT_VOLUME
from noteblock_music.domain.builders import attach, build_sequence, build_sound
from noteblock_music.domain.errors import FieldError, ScriptError
from noteblock_music.domain.instructions import Instruction, Sequence
from noteblock_music.domain.instruments import InstrumentResolver
from noteblock_music.domain.phases import Action, Field, Phase, transition

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """Grupo ainda aberto; `open_index` é a posição do seu `(`."""

    open_index: int
    children: list[Instruction] = field(default_factory=list)


class BuildContext:
    """Estado transitório usado apenas durante a compilação de um script."""

    def __init__(self, script: str) -> None:
        self.script: str = script
        self.phase: Phase = Phase.NEUTRAL
        self.field: Field | None = None
        self.buffers: dict[Field, str] = {}
        self.field_starts: dict[Field, int] = {}
        # A raiz não tem `(`; a pilha explícita substitui referências ao pai.
        self.frames: list[Frame] = [Frame(open_index=-1)]
        self.closed: Frame | None = None
        self.instruction_count: int = 0

    @property
    def active(self) -> Frame:
        return self.frames[-1]

    def retarget(self, target: Field | None, start: int) -> None:
        self.field = target
        if target is not None:
            self.field_starts.setdefault(target, start)

    def append(self, char: str, index: int) -> None:
        self.field_starts.setdefault(self.field, index)
        self.buffers[self.field] = self.buffers.get(self.field, '') + char

    def buffer(self, target: Field) -> str:
        return self.buffers.get(target, '')

    def reset(self) -> None:
        self.phase = Phase.NEUTRAL
        self.field = None
        self.buffers.clear()
        self.field_starts.clear()
        self.closed = None


class ScriptParser:
    """Compila o texto de um script em uma árvore de instruções.

    Formato de cada instrução, separadas por um espaço::

        INSTRUMENTO,NOTA[:VOLUME][,REPETIÇÕES[,ATRASO]] [PAUSA]
        (instrução instrução ...)[,REPETIÇÕES[,ATRASO]] [PAUSA]

    Os atrasos são em milissegundos. Qualquer erro estrutural interrompe a
    compilação com `ScriptError`; nunca é retornada uma árvore parcial.
    """

    def __init__(
        self,
        resolver: InstrumentResolver | None = None,
        default_volume: float = DEFAULT_VOLUME,
    ) -> None:
        self.resolver: InstrumentResolver = resolver or InstrumentResolver()
        self.default_volume: float = default_volume

    def parse(self, script: str) -> Sequence:
        context = BuildContext(script)

        for index, raw_char in enumerate(script):
            self._process_char(context, raw_char.upper(), index)

        self._flush(context, len(script))

        if len(context.frames) > 1:
            unclosed = context.frames[1]
            raise ScriptError(
                '( sem fechamento', unclosed.open_index, context.phase, script
            )

        root = build_sequence(context.active.children, '', '', '')
        logger.debug(
            'Script compilado: %d instruções, profundidade %d',
            context.instruction_count,
            root.depth(),
        )
        return root

    def _process_char(self, context: BuildContext, char: str, index: int) -> None:
        """Aplicar a transição calculada para o caractere."""
        step = transition(context.phase, context.field, char)

        match step.action:
            case Action.FAIL:
                raise ScriptError(
                    step.error or 'caractere inválido',
                    index,
                    context.phase,
                    context.script,
                )
            case Action.PUSH:
                self._flush(context, index)
                context.frames.append(Frame(open_index=index))
            case Action.POP:
                if len(context.frames) == 1:
                    raise ScriptError(
                        ') sem abertura', index, context.phase, context.script
                    )
                self._flush(context, index)
                context.closed = context.frames.pop()
            case Action.TERMINATE:
                self._flush(context, index)
            case Action.START:
                self._flush(context, index)
                context.phase = step.phase
                context.retarget(step.field, index)
                context.append(char, index)
                return
            case Action.APPEND:
                context.append(char, index)
            case Action.IGNORE:
                pass
            case Action.PROVISIONAL_FERMATA | Action.SEPARATE | Action.VOLUME:
                context.retarget(step.field, index + 1)

        context.phase = step.phase
        if step.action is not Action.APPEND:
            context.field = step.field

    def _flush(self, context: BuildContext, index: int) -> None:
        """Finalizar a instrução pendente e anexá-la ao grupo ativo."""
        if context.phase is Phase.NEUTRAL:
            return

        if context.phase is Phase.INSTRUMENT:
            raise ScriptError(
                'instrução incompleta, falta a nota',
                index,
                context.phase,
                context.script,
            )

        try:
            if context.closed is not None:
                node = build_sequence(
                    context.closed.children,
                    context.buffer(Field.RESTATEMENT),
                    context.buffer(Field.RESTATEMENT_DELAY),
                    context.buffer(Field.FERMATA),
                )
            else:
                node = build_sound(
                    context.buffer(Field.INSTRUMENT),
                    context.buffer(Field.PITCH),
                    context.buffer(Field.VOLUME),
                    context.buffer(Field.RESTATEMENT),
                    context.buffer(Field.RESTATEMENT_DELAY),
                    context.buffer(Field.FERMATA),
                    self.resolver,
                    self.default_volume,
                )
        except FieldError as exc:
            raise ScriptError(
                str(exc),
                context.field_starts.get(exc.field, index),
                context.phase,
                context.script,
            ) from exc

        attach(context.active.children, node)
        context.instruction_count += 1
        context.reset()


def compile_script(script: str, resolver: InstrumentResolver | None = None) -> Sequence:
    """Atalho para `ScriptParser(resolver).parse(script)`."""
    return ScriptParser(resolver).parse(script)
