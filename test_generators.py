# -*- coding: utf-8 -*-
"""
候选URL生成与配置解析测试
"""

from pathfuzz.config import Config, build_scan_config, parse_extensions, parse_int_list
from pathfuzz.generators import CandidateExpander, build_target, random_token


def test_extensions_follow_base_candidate(wordlist):
    path = wordlist('admin')
    expander = CandidateExpander('http://x/', path, ['php', 'html'])
    assert list(expander) == ['http://x/admin', 'http://x/admin.php', 'http://x/admin.html']


def test_fuzz_marker_is_substituted(wordlist):
    path = wordlist('a')
    expander = CandidateExpander('http://x/FUZZ/page', path, ['bak'])
    assert list(expander) == ['http://x/a/page', 'http://x/a/page.bak']


def test_blank_and_comment_lines_are_skipped(wordlist):
    path = wordlist('', '   ', '# comment', '#admin', '  login  ')
    expander = CandidateExpander('http://x', path, ['php'])
    assert list(expander) == ['http://x/login', 'http://x/login.php']


def test_each_entry_yields_one_plus_extensions(wordlist):
    path = wordlist('a', 'b', 'c')
    expander = CandidateExpander('http://x/', path, ['php', 'txt', 'bak'])
    assert len(list(expander)) == 3 * 4


def test_trailing_slashes_are_normalized():
    assert build_target('http://x///', 'admin') == 'http://x/admin'
    assert build_target('http://x', 'admin') == 'http://x/admin'


def test_every_iteration_rereads_wordlist(wordlist):
    path = wordlist('one', 'two')
    expander = CandidateExpander('http://x/', path)
    assert list(expander) == list(expander) == ['http://x/one', 'http://x/two']


def test_missing_wordlist_gives_empty_stream(tmp_path):
    expander = CandidateExpander('http://x/', str(tmp_path / 'missing.txt'), ['php'])
    assert list(expander) == []


def test_random_token_is_alphanumeric():
    token = random_token(12)
    assert len(token) == 12
    assert token.isalnum()


def test_parse_int_list_drops_malformed_entries():
    assert parse_int_list('404, abc,,500 ,4x4') == frozenset({404, 500})
    assert parse_int_list('') == frozenset()
    assert parse_int_list([301, '302']) == frozenset({301, 302})


def test_parse_extensions_strips_dots_and_keeps_order():
    assert parse_extensions('.php, html,,txt,php') == ('php', 'html', 'txt', 'php')


def test_default_scan_config():
    config = build_scan_config('http://x/', 'words.txt')
    assert config.exclude_codes == frozenset({404})
    assert config.filter_sizes == frozenset()
    assert config.extensions == ()
    assert config.max_depth == 1
    assert config.concurrency == 100
    assert config.jitter_ms == 0
    assert config.smart_filter is False


def test_yaml_config_with_overrides(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('threads: 7\nexclude: "404,403"\nsmart: true\nrecurse: 3\n', encoding='utf-8')
    config = Config(str(path))
    config.update({'threads': None, 'extensions': 'php', 'recurse': 2})

    scan_config = build_scan_config('http://x/', 'words.txt', config)
    assert scan_config.concurrency == 7
    assert scan_config.exclude_codes == frozenset({403, 404})
    assert scan_config.smart_filter is True
    assert scan_config.max_depth == 2
    assert scan_config.extensions == ('php',)


def test_missing_config_file_is_empty(tmp_path):
    config = Config(str(tmp_path / 'nope.yaml'))
    assert config.as_dict() == {}
    assert build_scan_config('http://x/', 'w.txt', config).exclude_codes == frozenset({404})


def test_bad_timeout_and_string_switches_fall_back(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('timeout: soon\nsmart: "no"\n', encoding='utf-8')
    scan_config = build_scan_config('http://x/', 'words.txt', Config(str(path)))
    assert scan_config.timeout == 10.0
    assert scan_config.smart_filter is False

    path.write_text('timeout: "2.5"\nsmart: "yes"\n', encoding='utf-8')
    scan_config = build_scan_config('http://x/', 'words.txt', Config(str(path)))
    assert scan_config.timeout == 2.5
    assert scan_config.smart_filter is True
