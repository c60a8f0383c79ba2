# -*- coding: utf-8 -*-
"""
扫描器模块

所有探测共用一个信号量，整个递归扫描过程中同时进行的请求数不会超过 concurrency。
每发现一个目录就提交一个新的扫描任务，与其他任务并发执行。
"""

import asyncio
import logging
import random
import time
from typing import AsyncIterator, Awaitable, Callable, Iterable, List, Optional, Set, Tuple

import aiohttp

from .models import Baseline, ProbeOutcome, ScanConfig, ScanPass, ScanResult
from .analyzers import BaselineCalibrator, ResponseClassifier, is_directory
from .generators import CandidateExpander
from .managers import MetricsAggregator, NullProgress

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = 405

# ValueError 包括主机名 IDNA 编码失败的 UnicodeError
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError)


class BoundedDispatcher:
    """受信号量限制的请求分发器"""

    def __init__(self, session: aiohttp.ClientSession, semaphore: asyncio.Semaphore,
                 config: ScanConfig):
        self.session = session
        self.semaphore = semaphore
        self.config = config
        self.in_flight = 0
        self.peak_in_flight = 0

    async def _request(self, method: str, url: str) -> Tuple[int, int]:
        """发送一次请求，返回 (状态码, 响应长度)"""
        async with self.session.request(method, url, allow_redirects=False) as response:
            length = response.content_length
            if length is None and method == 'GET':
                length = len(await response.read())
            return response.status, length or 0

    async def _jitter(self):
        """请求前等待 [0, jitter) 毫秒的随机时间"""
        if self.config.jitter_ms > 0:
            await asyncio.sleep(random.uniform(0, self.config.jitter_ms) / 1000)

    async def probe(self, url: str) -> ProbeOutcome:
        """探测单个URL：先HEAD，返回405时改用GET"""
        async with self.semaphore:
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                await self._jitter()
                method = 'HEAD'
                start_time = time.perf_counter()
                try:
                    status, length = await self._request(method, url)
                    if status == METHOD_NOT_ALLOWED:
                        method = 'GET'
                        status, length = await self._request(method, url)
                except TRANSPORT_ERRORS as e:
                    elapsed = (time.perf_counter() - start_time) * 1000
                    logger.debug(f"请求失败 {method} {url}: {e!r}")
                    return ProbeOutcome.failure(url, elapsed, method)
                elapsed = (time.perf_counter() - start_time) * 1000
                return ProbeOutcome(url=url, status=status, content_length=length,
                                    elapsed=elapsed, method=method)
            finally:
                self.in_flight -= 1

    async def dispatch(self, candidates: Iterable[str],
                       window: Optional[int] = None) -> AsyncIterator[ProbeOutcome]:
        """按完成顺序产出探测结果

        每次最多预先创建 window 个任务，避免大字典一次性生成全部任务；
        真正的并发上限由共享信号量保证。
        """
        window = window or self.config.concurrency
        urls = iter(candidates)
        pending: Set[asyncio.Future] = set()
        exhausted = False
        try:
            while True:
                while not exhausted and len(pending) < window:
                    url = next(urls, None)
                    if url is None:
                        exhausted = True
                        break
                    pending.add(asyncio.ensure_future(self.probe(url)))
                if not pending:
                    break
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    yield task.result()
        finally:
            for task in pending:
                task.cancel()


class FrontierController:
    """递归扫描控制器

    新的扫描以任务形式提交到同一个事件循环，父任务不等待子任务。
    """

    def __init__(self, config: ScanConfig, run_pass: Callable[[ScanPass], Awaitable[None]]):
        self.config = config
        self.run_pass = run_pass
        self.scheduled: List[ScanPass] = []
        self._tasks: Set[asyncio.Task] = set()

    def submit(self, scan_pass: ScanPass) -> Optional[asyncio.Task]:
        """提交一次扫描；超过最大深度时忽略"""
        if scan_pass.depth > self.config.max_depth:
            return None
        task = asyncio.ensure_future(self.run_pass(scan_pass))
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        self.scheduled.append(scan_pass)
        return task

    def _finished(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("扫描任务异常结束", exc_info=error)

    def maybe_descend(self, parent: ScanPass, result: ScanResult) -> Optional[ScanPass]:
        """结果像目录且深度允许时，提交下一层扫描"""
        if parent.depth >= self.config.max_depth:
            return None
        if not is_directory(result.status, result.url):
            return None
        child = ScanPass(base_url=result.url.rstrip('/') + '/', depth=parent.depth + 1)
        logger.debug(f"递归扫描 (深度 {child.depth}): {child.base_url}")
        self.submit(child)
        return child

    @property
    def active(self) -> int:
        return len(self._tasks)

    async def join(self):
        """等待所有扫描（包括运行中新提交的）结束"""
        while self._tasks:
            await asyncio.wait(set(self._tasks))


class RecursiveScanner:
    """递归目录扫描器"""

    def __init__(self, config: ScanConfig, progress=None,
                 session: Optional[aiohttp.ClientSession] = None, color: bool = False):
        self.config = config
        self.progress = progress or NullProgress()
        self.color = color
        self.metrics = MetricsAggregator()
        self.frontier = FrontierController(config, self.scan_pass)
        self.baseline = Baseline.inactive()
        self.results: List[ScanResult] = []

        self.session = session
        self._owns_session = session is None
        self.semaphore = None
        self.dispatcher = None
        self.classifier = None
        self.start_time = 0
        self.end_time = 0

    def _create_session(self) -> aiohttp.ClientSession:
        connector = aiohttp.TCPConnector(limit=self.config.concurrency, ssl=False)
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        headers = {'User-Agent': self.config.user_agent}
        return aiohttp.ClientSession(connector=connector, timeout=timeout, headers=headers)

    async def initialize(self):
        """创建会话、信号量，并在需要时建立404基线"""
        if self.session is None:
            self.session = self._create_session()
        self.semaphore = asyncio.Semaphore(self.config.concurrency)
        self.dispatcher = BoundedDispatcher(self.session, self.semaphore, self.config)
        self.baseline = await BaselineCalibrator(self.config).calibrate(self.session)
        self.classifier = ResponseClassifier(self.config, self.baseline)

    async def scan_pass(self, scan_pass: ScanPass):
        """扫描一个基础URL"""
        logger.debug(f"开始扫描 (深度 {scan_pass.depth}): {scan_pass.base_url}")
        candidates = CandidateExpander(scan_pass.base_url, self.config.wordlist,
                                       self.config.extensions)
        async for outcome in self.dispatcher.dispatch(candidates):
            self.progress.advance()
            self.metrics.record(outcome.elapsed, failed=outcome.failed)
            if self.classifier.should_report(outcome):
                result = ScanResult.from_outcome(outcome, scan_pass.depth)
                self.results.append(result)
                self._print_result(result)
                self.frontier.maybe_descend(scan_pass, result)
            self.progress.set_status(self.metrics.status_text())

    async def run_scan(self) -> List[ScanResult]:
        """运行扫描，直到所有递归扫描结束"""
        if self.dispatcher is None:
            await self.initialize()
        self.start_time = time.time()
        try:
            self.frontier.submit(ScanPass(base_url=self.config.target, depth=1))
            await self.frontier.join()
        finally:
            self.end_time = time.time()
        return self.results

    def format_result(self, result: ScanResult) -> str:
        status = str(result.status)
        if self.color:
            if 200 <= result.status < 300:
                color = '\033[92m'  # 绿色
            elif 300 <= result.status < 400:
                color = '\033[93m'  # 黄色
            else:
                color = '\033[91m'  # 红色
            status = f"{color}{status}\033[0m"
        return f"[{status}] {result.content_length:>8} | {result.url}"

    def _print_result(self, result: ScanResult):
        self.progress.write(self.format_result(result))

    async def close(self):
        """关闭扫描器资源"""
        if self.session and self._owns_session:
            await self.session.close()

    def get_stats(self) -> dict:
        """获取扫描统计信息"""
        end = self.end_time or time.time()
        duration = end - self.start_time if self.start_time else 0
        return {
            'target': self.config.target,
            'duration': duration,
            'requests_sent': self.metrics.requests,
            'requests_failed': self.metrics.failures,
            'reported': len(self.results),
            'passes': len(self.frontier.scheduled),
            'latency_ms': self.metrics.latency_ms(),
            'peak_in_flight': self.dispatcher.peak_in_flight if self.dispatcher else 0,
            'smart_filter': self.baseline.active,
            'requests_per_second': self.metrics.requests / duration if duration > 0 else 0,
        }

    def print_summary(self):
        """输出扫描摘要"""
        stats = self.get_stats()
        logger.info(
            f"扫描完成: {stats['target']} 用时 {stats['duration']:.2f} 秒, "
            f"请求 {stats['requests_sent']} (失败 {stats['requests_failed']}), "
            f"发现 {stats['reported']}, 扫描目录 {stats['passes']}, "
            f"最大并发 {stats['peak_in_flight']}, "
            f"{stats['requests_per_second']:.2f} 请求/秒"
        )
