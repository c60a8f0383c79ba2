# -*- coding: utf-8 -*-
"""
测试辅助：本地 aiohttp 测试服务器与字典文件
"""

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer


def _make_app(handler) -> web.Application:
    app = web.Application()
    app.router.add_route('*', '/{tail:.*}', handler)
    return app


@pytest.fixture
def make_app():
    """所有方法、所有路径都交给同一个处理函数"""
    return _make_app


@pytest.fixture
def serve():
    """启动测试服务器，运行 scenario(base_url)，返回其结果"""
    def _serve(app, scenario):
        async def runner():
            server = TestServer(app)
            await server.start_server()
            try:
                return await scenario(str(server.make_url('/')))
            finally:
                await server.close()
        return asyncio.run(runner())
    return _serve


@pytest.fixture
def wordlist(tmp_path):
    """写入字典文件并返回路径"""
    def _write(*lines):
        path = tmp_path / 'words.txt'
        path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
        return str(path)
    return _write
