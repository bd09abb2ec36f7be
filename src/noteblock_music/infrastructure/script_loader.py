import logging
from collections.abc import Iterator
from pathlib import Path

from noteblock_music.config import COMMENT_PREFIX

logger = logging.getLogger(__name__)


def iter_script_lines(file_path: Path) -> Iterator[str]:
    """Ler as linhas úteis do arquivo, ignorando linhas vazias e comentários."""
    with file_path.open(encoding='utf-8') as script_file:
        for line in script_file:
            line = line.strip()
            if not line or line.startswith(COMMENT_PREFIX):
                continue
            yield line


def load_script(file_path: Path) -> str:
    """Juntar as linhas do arquivo em um único script separado por espaços.

    O arquivo inteiro vira uma só música: um `(` aberto em uma linha pode ser
    fechado em uma linha seguinte; as linhas não são tocadas como trechos
    independentes.
    """
    script = ' '.join(iter_script_lines(file_path))
    logger.info('Script carregado: %s (%d caracteres)', file_path.name, len(script))
    return script
