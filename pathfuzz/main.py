# -*- coding: utf-8 -*-
"""
主入口模块
"""

import argparse
import asyncio
import logging
import os
import sys

from .config import Config, build_scan_config
from .logger import get_logger
from .managers import ProgressDisplay
from .scanner import RecursiveScanner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='递归目录扫描工具')
    parser.add_argument('-u', '--url', required=True, help='目标URL，可包含FUZZ标记')
    parser.add_argument('-w', '--wordlist', required=True, help='字典文件路径')
    parser.add_argument('-x', '--extensions', help='扩展名列表 (逗号分隔，例如: php,html)')
    parser.add_argument('-r', '--recurse', type=int, help='最大递归深度 (默认: 1，不递归)')
    parser.add_argument('--fs', dest='filter_sizes', help='过滤的响应长度 (逗号分隔)')
    parser.add_argument('-e', '--exclude', help='排除的状态码 (逗号分隔，默认: 404)')
    parser.add_argument('-t', '--threads', type=int, help='最大并发请求数 (默认: 100)')
    parser.add_argument('-j', '--jitter', type=int, help='请求前随机延迟上限 (毫秒，默认: 0)')
    parser.add_argument('-s', '--smart', action='store_true', default=None,
                        help='启用404基线智能过滤')
    parser.add_argument('-T', '--timeout', type=float, help='请求超时时间 (秒，默认: 10)')
    parser.add_argument('-A', '--user-agent', help='自定义User-Agent')
    parser.add_argument('-c', '--config', help='YAML配置文件路径')
    parser.add_argument('--no-color', action='store_true', help='不使用颜色输出')
    parser.add_argument('-v', '--verbose', action='store_true', help='输出调试日志')
    parser.add_argument('-q', '--quiet', action='store_true', help='只输出警告和错误日志')
    return parser


async def main(argv=None) -> int:
    """主函数"""
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    get_logger('pathfuzz', level)

    if not os.path.isfile(args.wordlist):
        print(f"错误: 字典文件不存在: {args.wordlist}", file=sys.stderr)
        return 2

    config = Config(args.config)
    config.update({
        'extensions': args.extensions,
        'recurse': args.recurse,
        'filter_sizes': args.filter_sizes,
        'exclude': args.exclude,
        'threads': args.threads,
        'jitter': args.jitter,
        'smart': args.smart,
        'timeout': args.timeout,
        'user_agent': args.user_agent,
    })
    scan_config = build_scan_config(args.url, args.wordlist, config)

    progress = ProgressDisplay()
    color = not args.no_color and sys.stdout.isatty()
    scanner = RecursiveScanner(scan_config, progress=progress, color=color)
    try:
        await scanner.run_scan()
    finally:
        progress.close("done.")
        await scanner.close()
    scanner.print_summary()
    return 0


def run():
    """运行函数，处理Windows平台的兼容性"""
    if sys.platform == 'win32':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        print("\n扫描被用户中断", file=sys.stderr)
        code = 130
    except Exception:
        logger.exception("扫描过程中发生错误")
        code = 1
    sys.exit(code)


if __name__ == '__main__':
    run()
