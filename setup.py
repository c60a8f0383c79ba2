#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pathfuzz包的安装脚本
"""

from setuptools import setup, find_packages
import os

# 获取包的版本号
try:
    with open(os.path.join('pathfuzz', '__init__.py'), 'r', encoding='utf-8') as f:
        for line in f:
            if line.startswith('__version__'):
                version = line.strip().split('=')[1].strip().strip('"').strip("'")
                break
        else:
            version = '0.1.0'
except OSError:
    version = '0.1.0'

# 读取README文件内容
try:
    with open('README.md', 'r', encoding='utf-8') as f:
        long_description = f.read()
except OSError:
    long_description = "递归目录扫描工具"

# 定义依赖项
install_requires = [
    'aiohttp>=3.8.0',
    'PyYAML>=5.4',
    'tqdm>=4.60.0',
]

extras_require = {
    'test': ['pytest>=7.0'],
}

# 设置包的配置
setup(
    name='pathfuzz',
    version=version,
    description='递归目录扫描工具',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='PyHack-Lab',
    author_email='',
    url='',
    packages=find_packages(include=['pathfuzz', 'pathfuzz.*']),
    package_data={'pathfuzz': ['default_config.yaml']},
    include_package_data=True,
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires='>=3.8',
    entry_points={
        'console_scripts': [
            'pathfuzz=pathfuzz.main:run',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Security',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Utilities',
    ],
    keywords='directory-scanner, fuzzing, content-discovery, web-security',
)
