"""配置管理：从 YAML 加载默认配置，合并命令行参数，生成不可变的 ScanConfig"""
import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Tuple, Union

import yaml

from .models import ScanConfig, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'default_config.yaml'


class Config:
    def __init__(self, path: str = None):
        self.path = Path(path) if path else DEFAULT_CONFIG_PATH
        self._data = {}
        self.load()

    def load(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                self._data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.debug(f"配置文件不存在: {self.path}")
            self._data = {}

    def get(self, key, default=None):
        return self._data.get(key, default)

    def update(self, values: dict):
        """合并覆盖值，None 表示未设置，不覆盖文件中的值"""
        for key, value in values.items():
            if value is not None:
                self._data[key] = value

    def as_dict(self):
        return dict(self._data)


def _split(value: Union[str, Iterable, None]):
    if value is None:
        return []
    if isinstance(value, (int, float)):
        return [str(value)]
    if isinstance(value, str):
        return value.split(',')
    return [str(v) for v in value]


def parse_int_list(value) -> FrozenSet[int]:
    """解析逗号分隔的整数列表，格式错误的项直接丢弃"""
    numbers = set()
    for item in _split(value):
        item = item.strip()
        try:
            numbers.add(int(item))
        except ValueError:
            if item:
                logger.debug(f"忽略无效数值: {item!r}")
    return frozenset(numbers)


def parse_extensions(value) -> Tuple[str, ...]:
    """解析扩展名列表：去空白、去前导点，保留顺序"""
    extensions = []
    for item in _split(value):
        ext = item.strip().lstrip('.')
        if ext:
            extensions.append(ext)
    return tuple(extensions)


def _as_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


TRUE_WORDS = ('1', 'true', 'yes', 'on')
FALSE_WORDS = ('0', 'false', 'no', 'off', '')


def _as_bool(value, default: bool) -> bool:
    """YAML 中写成字符串的开关（"no"、"off"）按字面意思解析"""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
    return default


def build_scan_config(url: str, wordlist: str, config: Config = None) -> ScanConfig:
    """根据配置生成扫描配置"""
    config = config or Config()
    return ScanConfig(
        target=url.strip(),
        wordlist=wordlist,
        extensions=parse_extensions(config.get('extensions', '')),
        exclude_codes=parse_int_list(config.get('exclude', '404')),
        filter_sizes=parse_int_list(config.get('filter_sizes', '')),
        max_depth=max(1, _as_int(config.get('recurse', 1), 1)),
        concurrency=max(1, _as_int(config.get('threads', 100), 100)),
        jitter_ms=max(0, _as_int(config.get('jitter', 0), 0)),
        smart_filter=_as_bool(config.get('smart', False), False),
        timeout=_as_float(config.get('timeout', 10), 10.0) or 10.0,
        user_agent=config.get('user_agent') or DEFAULT_USER_AGENT,
    )
