# -*- coding: utf-8 -*-
"""
pathfuzz包 - 递归目录扫描工具

根据字典生成候选路径，并发探测目标，过滤无意义的响应，
并对发现的目录继续递归扫描。

主要功能：
- 全局并发上限（所有递归扫描共享）
- 状态码 / 响应长度过滤
- 404基线智能过滤
- FUZZ标记替换与扩展名变体
- 随机请求延迟

使用方法：
```python
from pathfuzz import RecursiveScanner, build_scan_config

config = build_scan_config('https://example.com', 'words.txt')
scanner = RecursiveScanner(config)
results = await scanner.run_scan()
await scanner.close()
```
"""

from .models import ScanConfig, Baseline, ProbeOutcome, ScanPass, ScanResult
from .config import Config, build_scan_config, parse_int_list, parse_extensions
from .generators import CandidateExpander
from .analyzers import BaselineCalibrator, ResponseClassifier, is_directory
from .managers import MetricsAggregator, ProgressDisplay, NullProgress
from .scanner import BoundedDispatcher, FrontierController, RecursiveScanner
from .main import run

# 版本信息
__version__ = '1.0.0'

__all__ = [
    # 扫描器
    'RecursiveScanner',
    'BoundedDispatcher',
    'FrontierController',
    # 数据模型
    'ScanConfig',
    'Baseline',
    'ProbeOutcome',
    'ScanPass',
    'ScanResult',
    # 配置
    'Config',
    'build_scan_config',
    'parse_int_list',
    'parse_extensions',
    # 生成器与分析器
    'CandidateExpander',
    'BaselineCalibrator',
    'ResponseClassifier',
    'is_directory',
    # 管理器
    'MetricsAggregator',
    'ProgressDisplay',
    'NullProgress',
    # 主入口
    'run'
]
