"""
Поиск парных маркеров блока с учётом вложенности.

Общий механизм для {{#if}} и {{#each}}: по списку токенов от открывающего
маркера вправо ведётся счётчик вложенности своего семейства. Токены
другого семейства на счётчик не влияют.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .lexer import MarkerToken


@dataclass(frozen=True)
class MarkerFamily:
    """Семейство маркеров блока."""
    opener: str
    closer: str
    divider: Optional[str] = None


IF_FAMILY = MarkerFamily(opener='if', closer='endif', divider='else')
EACH_FAMILY = MarkerFamily(opener='each', closer='endeach')

FAMILIES = {
    IF_FAMILY.opener: IF_FAMILY,
    EACH_FAMILY.opener: EACH_FAMILY,
}


@dataclass(frozen=True)
class BlockMatch:
    """
    Результат поиска парного маркера.

    Attributes:
        close_index: Индекс закрывающего токена
        divider_index: Индекс {{else}} этого блока или None
    """
    close_index: int
    divider_index: Optional[int] = None


def find_block_end(tokens: List[MarkerToken], open_index: int, limit: Optional[int] = None) -> Optional[BlockMatch]:
    """
    Находит закрывающий маркер для открывающего токена.

    Разделителем ветвей считается только первый {{else}}, встреченный
    при счётчике ровно 1 (то есть принадлежащий самому блоку).

    Args:
        tokens: Все токены шаблона
        open_index: Индекс открывающего токена
        limit: Правая граница поиска (не включительно); по умолчанию конец списка

    Returns:
        BlockMatch или None, если блок не закрыт
    """
    family = FAMILIES[tokens[open_index].type]
    end = len(tokens) if limit is None else limit
    depth = 1
    divider_index: Optional[int] = None

    for i in range(open_index + 1, end):
        token_type = tokens[i].type
        if token_type == family.opener:
            depth += 1
        elif token_type == family.closer:
            depth -= 1
            if depth == 0:
                return BlockMatch(close_index=i, divider_index=divider_index)
        elif family.divider and token_type == family.divider:
            if depth == 1 and divider_index is None:
                divider_index = i

    return None


__all__ = ["MarkerFamily", "BlockMatch", "IF_FAMILY", "EACH_FAMILY", "find_block_end"]
