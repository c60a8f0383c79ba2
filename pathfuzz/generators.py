# -*- coding: utf-8 -*-
"""
生成器模块

从字典文件按行生成候选URL。每个字典项产生 1 + len(extensions) 个候选：
先是基础URL，然后是依次追加 ``.扩展名`` 的变体。
"""

import logging
import random
import string
from typing import Iterator, Sequence

from .models import FUZZ_MARKER

logger = logging.getLogger(__name__)

TOKEN_ALPHABET = string.ascii_letters + string.digits


def random_token(length: int = 12) -> str:
    """生成随机字母数字串"""
    return ''.join(random.choice(TOKEN_ALPHABET) for _ in range(length))


def build_target(base_url: str, word: str) -> str:
    """替换FUZZ标记，或将字典项拼接到基础URL之后"""
    if FUZZ_MARKER in base_url:
        return base_url.replace(FUZZ_MARKER, word)
    return f"{base_url.rstrip('/')}/{word}"


class CandidateExpander:
    """候选URL生成器

    每次迭代都重新打开字典文件，因此每个递归扫描都从头读取。
    字典无法打开时只产生空序列。
    """

    def __init__(self, base_url: str, wordlist_path: str, extensions: Sequence[str] = ()):
        self.base_url = base_url
        self.wordlist_path = wordlist_path
        self.extensions = tuple(extensions)

    def expand(self, word: str) -> Iterator[str]:
        """展开单个字典项"""
        word = word.strip()
        if not word or word.startswith('#'):
            return
        target = build_target(self.base_url, word)
        yield target
        for ext in self.extensions:
            yield f"{target}.{ext}"

    def __iter__(self) -> Iterator[str]:
        try:
            f = open(self.wordlist_path, 'r', encoding='utf-8', errors='ignore')
        except OSError as e:
            logger.debug(f"无法打开字典文件 {self.wordlist_path}: {e}")
            return
        with f:
            for line in f:
                yield from self.expand(line)
