# -*- coding: utf-8 -*-
"""
数据模型模块
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

# 目标模板中的替换标记
FUZZ_MARKER = 'FUZZ'

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)


@dataclass(frozen=True)
class ScanConfig:
    """扫描配置，所有递归扫描共享同一个实例"""
    target: str
    wordlist: str
    extensions: Tuple[str, ...] = ()
    exclude_codes: FrozenSet[int] = frozenset({404})
    filter_sizes: FrozenSet[int] = frozenset()
    max_depth: int = 1
    concurrency: int = 100
    jitter_ms: int = 0
    smart_filter: bool = False
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class Baseline:
    """404基线：随机不存在路径的响应特征"""
    active: bool = False
    content_length: Optional[int] = None
    line_count: Optional[int] = None
    word_count: Optional[int] = None

    @classmethod
    def inactive(cls) -> 'Baseline':
        return cls(active=False)


@dataclass(frozen=True)
class ProbeOutcome:
    """单次探测结果；status为None表示传输失败"""
    url: str
    status: Optional[int] = None
    content_length: Optional[int] = None
    elapsed: float = 0.0  # 毫秒
    method: str = 'HEAD'

    @property
    def failed(self) -> bool:
        return self.status is None

    @classmethod
    def failure(cls, url: str, elapsed: float = 0.0, method: str = 'HEAD') -> 'ProbeOutcome':
        return cls(url=url, elapsed=elapsed, method=method)


@dataclass(frozen=True)
class ScanPass:
    """一次扫描：基础URL与其深度"""
    base_url: str
    depth: int = 1


@dataclass
class ScanResult:
    """扫描结果数据类"""
    url: str
    status: int
    content_length: int
    response_time: float = 0.0
    depth: int = 1
    method: str = 'HEAD'

    @classmethod
    def from_outcome(cls, outcome: ProbeOutcome, depth: int) -> 'ScanResult':
        return cls(
            url=outcome.url,
            status=outcome.status,
            content_length=outcome.content_length or 0,
            response_time=outcome.elapsed,
            depth=depth,
            method=outcome.method,
        )
