# -*- coding: utf-8 -*-
"""
分析器模块
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

import aiohttp

from .models import Baseline, ProbeOutcome, ScanConfig
from .generators import build_target, random_token

logger = logging.getLogger(__name__)

# 与基线长度的差值小于该值时视为同一个404页面
SMART_TOLERANCE = 5

CALIBRATION_TOKEN_LENGTH = 12


class BaselineCalibrator:
    """404基线校准器

    请求一个随机的不存在路径，记录其长度、行数、单词数。
    任何失败都只会得到未激活的基线，扫描照常进行。
    """

    def __init__(self, config: ScanConfig):
        self.config = config

    def probe_url(self) -> str:
        """在目标后拼接随机路径（或替换FUZZ标记）"""
        return build_target(self.config.target, random_token(CALIBRATION_TOKEN_LENGTH))

    async def calibrate(self, session: aiohttp.ClientSession) -> Baseline:
        """建立404基线"""
        if not self.config.smart_filter:
            return Baseline.inactive()

        test_url = self.probe_url()
        logger.info(f"正在测试404基线: {test_url}")
        try:
            async with session.get(test_url, allow_redirects=False) as response:
                body = await response.read()
                length = response.content_length
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
            logger.warning(f"无法建立404基线，智能过滤已关闭: {e!r}")
            return Baseline.inactive()

        if length is None:
            length = len(body)
        text = body.decode('utf-8', errors='ignore')
        baseline = Baseline(
            active=True,
            content_length=length,
            line_count=len(text.splitlines()),
            word_count=len(text.split()),
        )
        logger.info(f"基线建立成功: 长度={baseline.content_length}, "
                    f"行数={baseline.line_count}, 单词数={baseline.word_count}")
        return baseline


class ResponseClassifier:
    """响应分类器：决定结果是否输出"""

    def __init__(self, config: ScanConfig, baseline: Optional[Baseline] = None):
        self.config = config
        self.baseline = baseline or Baseline.inactive()

    def matches_baseline(self, length: int) -> bool:
        """长度等于基线，或与非零基线相差小于 SMART_TOLERANCE"""
        baseline_len = self.baseline.content_length
        if not self.baseline.active or baseline_len is None:
            return False
        if length == baseline_len:
            return True
        return baseline_len > 0 and abs(length - baseline_len) < SMART_TOLERANCE

    def should_report(self, outcome: ProbeOutcome) -> bool:
        """依次检查：传输失败、排除状态码、过滤长度、404基线"""
        if outcome.failed:
            return False
        if outcome.status in self.config.exclude_codes:
            return False
        length = outcome.content_length or 0
        if length in self.config.filter_sizes:
            return False
        if self.config.smart_filter and self.matches_baseline(length):
            return False
        return True


def is_redirect(status: int) -> bool:
    """3xx状态码"""
    return 300 <= status < 400


def is_directory(status: int, url: str) -> bool:
    """重定向，或200且最后一段路径不含'.'时认为是目录"""
    if is_redirect(status):
        return True
    if status != 200:
        return False
    last_segment = urlparse(url).path.split('/')[-1]
    return '.' not in last_segment
