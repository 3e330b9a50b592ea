# tests/handlers/test_json_document.py
"""
Testes da edição cirúrgica de documentos JSON em texto.

Os testes asseguram que:
- só o trecho do valor alvo é substituído ou inserido
- membros inseridos seguem indentação e quebra de linha do arquivo
- valor já definido não gera reescrita (retorno None)
- intermediários que não são objeto falham com SettingApplyFailure
"""

import json

import pytest

from machine_setup.core.exceptions import SettingApplyFailure
from machine_setup.handlers.json_document import set_json_path


FACE = ("profiles", "defaults", "font", "face")


def test_inserts_missing_path_with_file_indentation():
    text = '{\n  "theme": "dark"\n}\n'
    patched = set_json_path(text, FACE, "Meslo")
    assert patched == (
        '{\n  "theme": "dark",\n  "profiles": {\n    "defaults": {\n'
        '      "font": {\n        "face": "Meslo"\n      }\n    }\n  }\n}\n'
    )


def test_tab_indentation_and_crlf_are_reused():
    patched = set_json_path('{\r\n\t"a": 1\r\n}', ("b", "c"), 2)
    assert patched == '{\r\n\t"a": 1,\r\n\t"b": {\r\n\t\t"c": 2\r\n\t}\r\n}'


@pytest.mark.parametrize(
    "text,expected",
    [
        ('{"a": 1}', '{"a": 1, "b": 2}'),
        ("{}", '{"b": 2}'),
        ('{"a": 1, "a": 5}', '{"a": 1, "a": 5, "b": 2}'),
    ],
)
def test_compact_documents_stay_compact(text, expected):
    assert set_json_path(text, ("b",), 2) == expected


def test_replaces_only_the_leaf_value():
    text = '{"opacity": 1e2, "font": {"face": "Consolas" , "size": 11}}'
    assert set_json_path(text, ("font", "face"), "Meslo") == (
        '{"opacity": 1e2, "font": {"face": "Meslo" , "size": 11}}'
    )


def test_duplicate_keys_edit_the_last_occurrence():
    assert set_json_path('{"a": 1, "a": 2}', ("a",), 3) == '{"a": 1, "a": 3}'


def test_null_intermediate_becomes_object():
    patched = set_json_path('{"profiles": null, "x": 1}', FACE, "Meslo")
    assert json.loads(patched) == {"profiles": {"defaults": {"font": {"face": "Meslo"}}}, "x": 1}
    assert patched.endswith(', "x": 1}')


def test_non_ascii_text_is_written_unescaped():
    assert set_json_path('{"name": "café"}', ("x",), "é") == '{"name": "café", "x": "é"}'


def test_equal_value_returns_none():
    assert set_json_path('{"a": 1e2}', ("a",), 100.0) is None


def test_non_object_intermediate_fails():
    with pytest.raises(SettingApplyFailure, match="profiles"):
        set_json_path('{"profiles": []}', FACE, "Meslo")


def test_non_object_root_fails():
    with pytest.raises(SettingApplyFailure):
        set_json_path("[1, 2]", FACE, "Meslo")
