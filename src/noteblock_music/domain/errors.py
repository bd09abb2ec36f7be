from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from noteblock_music.domain.phases import Field, Phase


class FieldError(ValueError):
    """Conteúdo inválido em um campo de uma instrução."""

    def __init__(self, field: Field, message: str) -> None:
        super().__init__(message)
        self.field: Field = field


class ScriptError(Exception):
    """Falha estrutural ao compilar um script musical.

    Guarda a posição do caractere problemático e a fase do analisador no
    momento da falha, o suficiente para apontar o erro no texto original.
    """

    def __init__(
        self,
        message: str,
        index: int,
        phase: Phase,
        script: str = '',
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.index: int = index
        self.phase: Phase = phase
        self.script: str = script

    def __str__(self) -> str:
        return f'{self.message} (index {self.index}, phase {self.phase})'

    def pointer(self) -> str:
        """Renderizar o script com um circunflexo sob o caractere inválido."""
        return f'{self.script}\n{" " * self.index}^'
