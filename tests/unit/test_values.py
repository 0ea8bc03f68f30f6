"""JSON value classification and rendering tests."""

import json
import sys

import pytest

from request_validator.validation.values import JSONKind, json_kind, render_value


@pytest.mark.parametrize('value, kind', [
    ({}, JSONKind.OBJECT),
    ([], JSONKind.ARRAY),
    ('', JSONKind.STRING),
    (0, JSONKind.NUMBER),
    (1.5, JSONKind.NUMBER),
    (True, JSONKind.BOOLEAN),
    (False, JSONKind.BOOLEAN),
    (None, JSONKind.NULL),
])
def test_json_kind(value, kind):
    assert json_kind(value) is kind


def test_json_kind_rejects_non_json_types():
    with pytest.raises(TypeError):
        json_kind(object())


@pytest.mark.parametrize('value, text', [
    ('abc', 'abc'),
    (12345, '12345'),
    (12345.0, '12345'),
    (-3.0, '-3'),
    (1.5, '1.5'),
    (1e21, '1e+21'),
    (True, 'true'),
    (False, 'false'),
    (None, 'null'),
    ([1, 2], '[1,2]'),
    ({'a': 'x'}, '{"a":"x"}'),
])
def test_render_value(value, text):
    assert render_value(value) == text


def test_render_container_matches_compact_json():
    value = {'a': [1, 2.5, 3.0, None, True], 'b': {'c': 'é"q', 'd': []}, 'e': {}}
    assert render_value(value) == json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def test_render_nesting_beyond_recursion_limit():
    depth = sys.getrecursionlimit() + 500
    value = 'x'
    for _ in range(depth):
        value = {'k': [value]}

    assert render_value(value) == '{"k":[' * depth + '"x"' + ']}' * depth
