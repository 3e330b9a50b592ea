"""Edição cirúrgica de documentos JSON em texto.

Usado para arquivos de settings de terceiros (ex.: settings.json do
Windows Terminal): o documento é interpretado apenas para decidir o que
mudar, e a escrita substitui ou insere somente o trecho do valor alvo.

Invariantes:
    - Fora do trecho editado, o texto permanece byte a byte idêntico
      (indentação, quebras de linha, números como `1e2`, escapes `\\uXXXX`)
    - Membros inseridos seguem a indentação e a quebra de linha do arquivo
    - Chaves duplicadas: vale a última ocorrência, como em `json.loads`

Limites explícitos:
    - JSON estrito (sem comentários nem vírgulas finais)
"""

from __future__ import annotations

import json
import re
from collections import OrderedDict
from json.decoder import scanstring
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence

from machine_setup.core.exceptions import SettingApplyFailure


_WS = re.compile(r"[ \t\n\r]*")
_FIRST_INDENT = re.compile(r"\n([ \t]+)\S")
DEFAULT_INDENT = "    "


class _Member(NamedTuple):
    key: str
    key_start: int
    value_start: int
    value_end: int


def set_nested(document: Dict[str, Any], path: Sequence[str], value: Any) -> bool:
    """
    Define `value` no caminho aninhado, criando objetos intermediários.

    Returns:
        bool: True se o documento mudou.

    Raises:
        SettingApplyFailure: Se um intermediário existir e não for objeto.
    """
    node = document
    for depth, part in enumerate(path[:-1]):
        child = node.get(part)
        if child is None:
            child = OrderedDict()
            node[part] = child
        elif not isinstance(child, dict):
            raise SettingApplyFailure(
                message=f"'{'.'.join(path[: depth + 1])}' is not an object",
                details={"path": ".".join(path), "received": type(child).__name__},
            )
        node = child

    leaf = path[-1]
    if leaf in node and node[leaf] == value:
        return False
    node[leaf] = value
    return True


def set_json_path(text: str, path: Sequence[str], value: Any) -> Optional[str]:
    """
    Garante `value` em `path` no texto JSON, preservando todo o resto.

    Returns:
        Optional[str]: Novo texto, ou None se o valor já estava definido.

    Raises:
        json.JSONDecodeError: Se o texto não for JSON válido.
        SettingApplyFailure: Se a raiz ou um intermediário não for objeto.
    """
    document = json.loads(text)
    if not isinstance(document, dict):
        raise SettingApplyFailure(
            message="JSON root must be an object",
            details={"path": ".".join(path)},
        )
    if not set_nested(document, path, value):
        return None
    return _splice(text, list(path), value)


# ---------------------------------------------------------------------------
# Localização de trechos
# ---------------------------------------------------------------------------

def _skip_ws(text: str, idx: int) -> int:
    return _WS.match(text, idx).end()


def _members(text: str, start: int) -> Iterator[_Member]:
    """Membros do objeto cujo `{` está em `start` (texto já validado)."""
    decoder = json.JSONDecoder()
    idx = _skip_ws(text, start + 1)
    if text[idx] == "}":
        return
    while True:
        key_start = idx
        key, idx = scanstring(text, idx + 1)
        idx = _skip_ws(text, _skip_ws(text, idx) + 1)
        value_start = idx
        _, idx = decoder.raw_decode(text, idx)
        yield _Member(key, key_start, value_start, idx)
        idx = _skip_ws(text, idx)
        if text[idx] == "}":
            return
        idx = _skip_ws(text, idx + 1)


def _line_indent(text: str, pos: int) -> str:
    line_start = text.rfind("\n", 0, pos) + 1
    line = text[line_start:pos]
    return line[: len(line) - len(line.lstrip(" \t"))]


# ---------------------------------------------------------------------------
# Escrita
# ---------------------------------------------------------------------------

def _splice(text: str, path: List[str], value: Any) -> str:
    ascii_only = text.isascii()
    start = _skip_ws(text, 0)
    for depth, key in enumerate(path):
        match = None
        members = list(_members(text, start))
        for member in members:
            if member.key == key:
                match = member

        if match is None:
            for part in reversed(path[depth + 1:]):
                value = {part: value}
            return _insert_member(text, start, members, key, value, ascii_only)

        # folha, ou intermediário `null` substituído por objeto
        if depth == len(path) - 1 or text[match.value_start] != "{":
            for part in reversed(path[depth + 1:]):
                value = {part: value}
            rendered = json.dumps(value, ensure_ascii=ascii_only)
            return text[: match.value_start] + rendered + text[match.value_end:]
        start = match.value_start

    raise ValueError("empty path")


def _render_member(key: str, value: Any, indent: Optional[str], unit: str, newline: str, ascii_only: bool) -> str:
    head = json.dumps(key, ensure_ascii=ascii_only) + ": "
    if indent is None:
        return head + json.dumps(value, ensure_ascii=ascii_only)
    body = json.dumps(value, indent=unit, ensure_ascii=ascii_only)
    return head + body.replace("\n", newline + indent)


def _insert_member(
    text: str,
    obj_start: int,
    members: List[_Member],
    key: str,
    value: Any,
    ascii_only: bool,
) -> str:
    newline = "\r\n" if "\r\n" in text else "\n"
    found = _FIRST_INDENT.search(text)
    unit = found.group(1) if found else DEFAULT_INDENT

    if members:
        gap = text[obj_start + 1 : members[0].key_start]
        if "\n" in gap:
            indent = gap[gap.rfind("\n") + 1 :]
            insertion = "," + newline + indent + _render_member(key, value, indent, unit, newline, ascii_only)
        else:
            insertion = ", " + _render_member(key, value, None, unit, newline, ascii_only)
        pos = members[-1].value_end
        return text[:pos] + insertion + text[pos:]

    close = _skip_ws(text, obj_start + 1)
    if "\n" in text:
        outer = _line_indent(text, obj_start)
        indent = outer + unit
        inner = newline + indent + _render_member(key, value, indent, unit, newline, ascii_only) + newline + outer
    else:
        inner = _render_member(key, value, None, unit, newline, ascii_only)
    return text[: obj_start + 1] + inner + text[close:]
