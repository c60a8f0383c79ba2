# -*- coding: utf-8 -*-
"""
管理器模块
"""

import sys
from typing import List, Optional

from tqdm import tqdm


class MetricsAggregator:
    """请求计数与延迟估计

    所有扫描共享同一个实例。延迟估计为 (旧值 + 新值) / 2 的平滑值，
    不是真正的平均数；并发更新时允许丢失，读到的是近似值。
    """

    def __init__(self):
        self.requests = 0
        self.failures = 0
        self.latency: Optional[float] = None

    def record(self, latency_ms: float, failed: bool = False):
        """记录一次完成的探测（成功或失败）"""
        self.requests += 1
        if failed:
            self.failures += 1
        previous = self.latency
        self.latency = latency_ms if previous is None else (previous + latency_ms) / 2

    def latency_ms(self) -> int:
        """当前延迟估计（毫秒，取整）"""
        return int(self.latency or 0)

    def status_text(self) -> str:
        return f"latency: {self.latency_ms()}ms"


class ProgressDisplay:
    """基于tqdm的进度显示"""

    def __init__(self, disable: Optional[bool] = None):
        if disable is None:
            disable = not sys.stderr.isatty()
        self.bar = tqdm(
            total=None,
            desc="Fuzzing",
            unit="req",
            file=sys.stderr,
            disable=disable,
        )

    def advance(self, n: int = 1):
        """完成n个请求"""
        self.bar.update(n)

    def set_status(self, text: str):
        """更新进度条后的状态文字"""
        self.bar.set_postfix_str(text, refresh=False)

    def write(self, line: str):
        """暂停进度条，输出一行，再恢复"""
        tqdm.write(line, file=sys.stdout)

    def close(self, message: str = ''):
        if message:
            self.bar.set_postfix_str(message)
        self.bar.close()


class NullProgress:
    """无界面的进度实现，记录输出的行"""

    def __init__(self):
        self.lines: List[str] = []
        self.steps = 0
        self.status = ''

    def advance(self, n: int = 1):
        self.steps += n

    def set_status(self, text: str):
        self.status = text

    def write(self, line: str):
        self.lines.append(line)

    def close(self, message: str = ''):
        if message:
            self.status = message
