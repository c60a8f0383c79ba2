# -*- coding: utf-8 -*-
"""
响应分类、目录判断与404基线测试
"""

import asyncio

import aiohttp
from aiohttp import web

from pathfuzz.analyzers import BaselineCalibrator, ResponseClassifier, is_directory
from pathfuzz.models import Baseline, ProbeOutcome, ScanConfig


def outcome(status, length, url='http://x/admin'):
    return ProbeOutcome(url=url, status=status, content_length=length, elapsed=1.0)


def test_transport_failure_is_suppressed():
    classifier = ResponseClassifier(ScanConfig('http://x/', 'w.txt', exclude_codes=frozenset()))
    assert not classifier.should_report(ProbeOutcome.failure('http://x/a'))


def test_excluded_status_codes():
    config = ScanConfig('http://x/', 'w.txt', exclude_codes=frozenset({404, 403}))
    classifier = ResponseClassifier(config)
    assert not classifier.should_report(outcome(404, 10))
    assert not classifier.should_report(outcome(403, 10))
    assert classifier.should_report(outcome(200, 10))


def test_excluded_content_lengths():
    config = ScanConfig('http://x/', 'w.txt', filter_sizes=frozenset({0, 1234}))
    classifier = ResponseClassifier(config)
    assert not classifier.should_report(outcome(200, 1234))
    assert not classifier.should_report(outcome(200, 0))
    assert classifier.should_report(outcome(200, 1235))


def test_smart_filter_boundary():
    config = ScanConfig('http://x/', 'w.txt', smart_filter=True)
    classifier = ResponseClassifier(config, Baseline(active=True, content_length=100))
    assert not classifier.should_report(outcome(200, 100))
    assert not classifier.should_report(outcome(200, 104))
    assert not classifier.should_report(outcome(200, 96))
    assert classifier.should_report(outcome(200, 105))
    assert classifier.should_report(outcome(200, 110))


def test_smart_filter_zero_length_baseline_only_matches_exactly():
    config = ScanConfig('http://x/', 'w.txt', smart_filter=True)
    classifier = ResponseClassifier(config, Baseline(active=True, content_length=0))
    assert not classifier.should_report(outcome(200, 0))
    assert classifier.should_report(outcome(200, 3))


def test_inactive_baseline_disables_smart_filter():
    config = ScanConfig('http://x/', 'w.txt', smart_filter=True)
    classifier = ResponseClassifier(config, Baseline.inactive())
    assert classifier.should_report(outcome(200, 100))


def test_directory_likeness():
    assert is_directory(301, 'http://x/report.pdf')
    assert is_directory(302, 'http://x/admin')
    assert not is_directory(200, 'http://x/files/report.pdf')
    assert is_directory(200, 'http://x/images')
    assert not is_directory(403, 'http://x/images')


def test_calibration_records_not_found_signature(serve, make_app):
    body = 'page not found\nsorry about that\n'

    async def handler(request):
        return web.Response(status=200, text=body)

    async def scenario(base_url):
        config = ScanConfig(base_url, 'w.txt', smart_filter=True)
        async with aiohttp.ClientSession() as session:
            return await BaselineCalibrator(config).calibrate(session)

    baseline = serve(make_app(handler), scenario)
    assert baseline.active
    assert baseline.content_length == len(body.encode())
    assert baseline.line_count == 2
    assert baseline.word_count == 6


def test_calibration_probe_is_random_path():
    calibrator = BaselineCalibrator(ScanConfig('http://x/', 'w.txt', smart_filter=True))
    first, second = calibrator.probe_url(), calibrator.probe_url()
    assert first.startswith('http://x/') and len(first) == len('http://x/') + 12
    assert first != second


def test_calibration_failure_gives_inactive_baseline():
    async def scenario():
        config = ScanConfig('http://127.0.0.1:1/', 'w.txt', smart_filter=True, timeout=2)
        async with aiohttp.ClientSession() as session:
            return await BaselineCalibrator(config).calibrate(session)

    assert asyncio.run(scenario()) == Baseline.inactive()


def test_calibration_skipped_without_smart_filter():
    async def scenario():
        config = ScanConfig('http://127.0.0.1:1/', 'w.txt')
        async with aiohttp.ClientSession() as session:
            return await BaselineCalibrator(config).calibrate(session)

    assert not asyncio.run(scenario()).active
