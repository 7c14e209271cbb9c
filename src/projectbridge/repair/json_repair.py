# src/projectbridge/repair/json_repair.py
"""
Best-effort recovery of JSON from LLM completions.

The public entry points are `safe_parse_json` (never raises) and `repair_json`
(text in, text out). Repairs run as an ordered chain of small named steps:

    direct parse -> extraction -> light repair -> position-specific repair
    -> bracket balancing -> valid-subset extraction -> caller fallback

Later steps assume the earlier ones already ran (balancing expects commas and
colons to be in place), so LIGHT_REPAIR_STEPS is an ordered tuple, not a set.
Every step returns its input unchanged when it cannot help.
"""
from __future__ import annotations
import functools
import json
import logging
import re
from collections import namedtuple
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

_OPENER = {"}": "{", "]": "["}
_CLOSER = {"{": "}", "[": "]"}
_MAX_POSITION_PASSES = 25
_WINDOW = 50
_SUBSET_BUDGET_FACTOR = 8
_SUBSET_MIN_BUDGET = 4096

Token = namedtuple("Token", "kind text")

_TOKEN = re.compile(r"""
    (?P<string>"(?:\\.|[^"\\])*")
  | (?P<open_string>"(?:\\.|[^"\\])*\Z)
  | (?P<squote>'(?:\\.|[^'\\\n])*')
  | (?P<punct>[{}\[\]:,])
  | (?P<space>\s+)
  | (?P<word>[^\s{}\[\]:,"']+)
  | (?P<stray>.)
""", re.VERBOSE | re.DOTALL)

_FENCE = re.compile(r"```(?:json|javascript|js)?[ \t]*", re.IGNORECASE)
_KEY_AHEAD = re.compile(r'\s*"(?:\\.|[^"\\])*"\s*:')
_BARE = re.compile(r'[^\s,:{}\[\]"][^,:{}\[\]"\n]*')
_DANGLING_KEY = re.compile(r'([{,])\s*"(?:\\.|[^"\\])*"\s*$')
_DANGLING_PAIR = re.compile(r'"(?:\\.|[^"\\])*"\s*:\s*$')
_SUBSET_KEY = re.compile(r'"([A-Za-z_][\w\- ]*)"\s*:\s*')
_PY_LITERALS = {"True": "true", "False": "false", "None": "null", "undefined": "null"}
_DECODER = json.JSONDecoder()
_MISSING = object()


def _repair_step(fn: Callable[[str], str]) -> Callable[[str], str]:
    """A repair step never raises; on any failure the text passes through untouched."""
    @functools.wraps(fn)
    def wrapper(text: str) -> str:
        try:
            return fn(text)
        except Exception as e:
            logger.debug("[repair] %s skipped: %s: %s", fn.__name__, type(e).__name__, e)
            return text
    return wrapper


def _parses(text: str) -> bool:
    try:
        json.loads(text)
        return True
    except (ValueError, RecursionError):
        return False


# ---------- tokens ----------
def _tokenize(text: str) -> List[Token]:
    return [Token(m.lastgroup, m.group()) for m in _TOKEN.finditer(text)]


def _is_punct(tok: Optional[Token], chars: str) -> bool:
    return tok is not None and tok.kind == "punct" and tok.text in chars


def _is_value_end(tok: Optional[Token]) -> bool:
    return tok is not None and (tok.kind in ("string", "word") or _is_punct(tok, "}]"))


def _is_value_start(tok: Optional[Token]) -> bool:
    return tok is not None and (tok.kind in ("string", "word", "squote") or _is_punct(tok, "{["))


class _Scan:
    """Tokens of a text, its significant (non-space) tokens and each one's enclosing container."""

    def __init__(self, text: str):
        self.tokens = _tokenize(text)
        self.sig = [i for i, t in enumerate(self.tokens) if t.kind != "space"]
        self.ctx: Dict[int, Optional[str]] = {}
        stack: List[str] = []
        for i in self.sig:
            tok = self.tokens[i]
            self.ctx[i] = stack[-1] if stack else None
            if _is_punct(tok, "{["):
                stack.append(tok.text)
            elif _is_punct(tok, "}]") and _OPENER[tok.text] in stack:
                while stack.pop() != _OPENER[tok.text]:
                    pass

    def at(self, k: int) -> Optional[Token]:
        return self.tokens[self.sig[k]] if 0 <= k < len(self.sig) else None

    def is_key(self, k: int) -> bool:
        tok = self.at(k)
        return tok is not None and tok.kind in ("string", "word") and _is_punct(self.at(k + 1), ":")

    def emit(self, before=None, after=None, replace=None) -> str:
        before, after, replace = before or {}, after or {}, replace or {}
        out = []
        for i, tok in enumerate(self.tokens):
            out.append(before.get(i, ""))
            out.append(replace.get(i, tok.text))
            out.append(after.get(i, ""))
        return "".join(out)


def _open_stack(text: str, end: Optional[int] = None) -> List[str]:
    """Containers still open at `end`, string contents ignored."""
    stack: List[str] = []
    in_string = escaped = False
    for ch in text[:end]:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append(ch)
        elif ch in "}]" and _OPENER[ch] in stack:
            while stack.pop() != _OPENER[ch]:
                pass
    return stack


# ---------- light repair ----------
@_repair_step
def strip_code_fences(text: str) -> str:
    return _FENCE.sub("", text)


@_repair_step
def strip_comments(text: str) -> str:
    """Drop // line comments and /* block */ comments outside of strings."""
    out, i, n = [], 0, len(text)
    in_string = escaped = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            i += 1
        elif text.startswith("//", i):
            nl = text.find("\n", i)
            i = n if nl == -1 else nl
        elif text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = n if close == -1 else close + 2
        else:
            in_string = ch == '"'
            out.append(ch)
            i += 1
    return "".join(out)


def _requote(squoted: str) -> str:
    inner = squoted[1:-1].replace("\\'", "'")
    inner = re.sub(r'(?<!\\)"', r'\\"', inner)
    return f'"{inner}"'


@_repair_step
def fix_single_quotes(text: str) -> str:
    scan = _Scan(text)
    replace = {i: _requote(t.text) for i, t in enumerate(scan.tokens) if t.kind == "squote"}
    return scan.emit(replace=replace) if replace else text


@_repair_step
def fix_unquoted_property_names(text: str) -> str:
    scan = _Scan(text)
    replace = {}
    for k, i in enumerate(scan.sig):
        tok = scan.tokens[i]
        if tok.kind == "word" and scan.ctx[i] == "{" and scan.is_key(k):
            replace[i] = f'"{tok.text}"'
    return scan.emit(replace=replace) if replace else text


@_repair_step
def fix_missing_colons(text: str) -> str:
    """`{"name" "React"}` -> `{"name": "React"}`"""
    scan = _Scan(text)
    after = {}
    for k, i in enumerate(scan.sig):
        tok = scan.tokens[i]
        if tok.kind != "string" or scan.ctx[i] != "{":
            continue
        if not _is_punct(scan.at(k - 1), "{,"):
            continue
        if _is_value_start(scan.at(k + 1)) and not scan.is_key(k + 1):
            after[i] = ":"
    return scan.emit(after=after) if after else text


@_repair_step
def fix_missing_commas_in_arrays(text: str) -> str:
    """`["React" "Node.js"]` -> `["React", "Node.js"]`"""
    scan = _Scan(text)
    after = {}
    for k, i in enumerate(scan.sig):
        tok, prev = scan.tokens[i], scan.at(k - 1)
        if scan.ctx[i] != "[" or not _is_value_start(tok) or not _is_value_end(prev):
            continue
        if _is_punct(prev, "}]") and _is_punct(tok, "{["):
            continue  # between containers, next step
        after[scan.sig[k - 1]] = ","
    return scan.emit(after=after) if after else text


@_repair_step
def fix_missing_commas_between_containers(text: str) -> str:
    """`}{`, `][`, `}[` and `]{` get a comma."""
    scan = _Scan(text)
    after = {}
    for k, i in enumerate(scan.sig):
        if _is_punct(scan.tokens[i], "{[") and _is_punct(scan.at(k - 1), "}]"):
            after[scan.sig[k - 1]] = ","
    return scan.emit(after=after) if after else text


@_repair_step
def fix_missing_commas_before_keys(text: str) -> str:
    """`{"a": 1 "b": 2}` -> `{"a": 1, "b": 2}`"""
    scan = _Scan(text)
    after = {}
    for k, i in enumerate(scan.sig):
        if scan.ctx[i] == "{" and scan.is_key(k) and _is_value_end(scan.at(k - 1)):
            after[scan.sig[k - 1]] = ","
    return scan.emit(after=after) if after else text


@_repair_step
def fix_trailing_commas(text: str) -> str:
    scan = _Scan(text)
    replace = {}
    for k, i in enumerate(scan.sig):
        if _is_punct(scan.tokens[i], ",") and _is_punct(scan.at(k + 1), "}]"):
            replace[i] = ""
    return scan.emit(replace=replace) if replace else text


@_repair_step
def fix_unclosed_arrays_before_properties(text: str) -> str:
    """
    `{"skills": ["a", "b", "experience": [...]}` -> `{"skills": ["a", "b"], "experience": [...]}`

    An array that runs into `"key":` is closed right before the key (or before
    the comma that precedes it).
    """
    scan = _Scan(text)
    before: Dict[int, str] = {}
    stack: List[str] = []
    for k, i in enumerate(scan.sig):
        tok = scan.tokens[i]
        if scan.is_key(k) and stack and stack[-1] == "[" and "{" in stack:
            closers = ""
            while stack[-1] == "[":
                stack.pop()
                closers += "]"
            prev = scan.at(k - 1)
            if _is_punct(prev, ","):
                idx = scan.sig[k - 1]
                before[idx] = before.get(idx, "") + closers
            else:
                before[i] = before.get(i, "") + closers + ", "
        if _is_punct(tok, "{["):
            stack.append(tok.text)
        elif _is_punct(tok, "}]") and _OPENER[tok.text] in stack:
            while stack.pop() != _OPENER[tok.text]:
                pass
    return scan.emit(before=before) if before else text


LIGHT_REPAIR_STEPS: Tuple[Callable[[str], str], ...] = (
    strip_code_fences,
    strip_comments,
    fix_single_quotes,
    fix_unquoted_property_names,
    fix_missing_colons,
    fix_missing_commas_in_arrays,
    fix_missing_commas_between_containers,
    fix_missing_commas_before_keys,
    fix_trailing_commas,
    fix_unclosed_arrays_before_properties,
)


def light_repair(text: str) -> str:
    for step in LIGHT_REPAIR_STEPS:
        text = step(text)
    return text


# ---------- position-specific repair ----------
def _insert(text: str, pos: int, s: str) -> str:
    return text[:pos] + s + text[pos:]


def _drop_comma_before(text: str, pos: int) -> str:
    j = len(text[:pos].rstrip()) - 1
    if j >= 0 and text[j] == ",":
        return text[:j] + text[j + 1:]
    return text


def _quote_bare_word(text: str, pos: int, literals: bool) -> str:
    m = _BARE.match(text, pos)
    if not m:
        return text
    word = m.group().rstrip()
    if literals and word in _PY_LITERALS:
        replacement = _PY_LITERALS[word]
    else:
        replacement = json.dumps(word)
    return text[:pos] + replacement + text[pos + len(word):]


def _escape_control(ch: str) -> str:
    return {"\n": "\\n", "\r": "\\r", "\t": "\\t"}.get(ch, "\\u%04x" % ord(ch))


def _close_string(text: str) -> str:
    """Close a string that runs to the end of the text; a lone trailing backslash is dropped."""
    trailing = len(text) - len(text.rstrip("\\"))
    if trailing % 2:
        text = text[:-1]
    return text + '"'


def fix_position_specific_issue(text: str, position: int, message: str) -> str:
    """
    One targeted edit at the offset reported by `json.JSONDecodeError`, chosen
    from the error class and a +/-50 character window around the offset.
    Returns the text unchanged when nothing applies.
    """
    if not isinstance(text, str) or not 0 <= position <= len(text):
        return text
    head = text[max(0, position - _WINDOW):position]
    tail = text[position:position + _WINDOW]
    ch = text[position:position + 1]
    prev_ch = head.rstrip()[-1:]
    logger.debug("[repair] %s at %d: ...%s<HERE>%s...", message, position, head[-20:], tail[:20])

    if message.startswith("Extra data"):
        return text[:position]
    if message.startswith("Illegal trailing comma"):
        return text[:position] + text[position + 1:] if ch == "," else _drop_comma_before(text, position)
    if message.startswith("Unterminated string"):
        return _close_string(text)
    if message.startswith("Invalid control character"):
        return text[:position] + _escape_control(ch) + text[position + 1:]
    if message.startswith("Invalid \\escape"):
        return _insert(text, position, "\\")

    if ch in ("}", "]"):
        stack = _open_stack(text, position)
        if _OPENER[ch] not in stack:
            return text[:position] + text[position + 1:]
        if stack[-1] != _OPENER[ch]:
            # close the inner containers the closer skips over
            deepest = len(stack) - 1 - stack[::-1].index(_OPENER[ch])
            return _insert(text, position, "".join(_CLOSER[o] for o in reversed(stack[deepest + 1:])))

    if message.startswith("Expecting ':'"):
        return _insert(text, position, ":")
    if message.startswith("Expecting ','"):
        if _open_stack(text, position)[-1:] == ["["] and _KEY_AHEAD.match(tail):
            return _insert(text, position, "], ")
        return _insert(text, position, ", ")
    if message.startswith("Expecting property name"):
        if ch == "}" and prev_ch == ",":
            return _drop_comma_before(text, position)
        return _quote_bare_word(text, position, literals=False)
    if message.startswith("Expecting value"):
        if ch in ("}", "]") and prev_ch == ",":
            return _drop_comma_before(text, position)
        if ch == "," and prev_ch in ("[", ","):
            return text[:position] + text[position + 1:]
        if ch in (",", "}") and prev_ch == ":":
            return _insert(text, position, '""')
        return _quote_bare_word(text, position, literals=True)
    return text


def _fix_positions(text: str) -> str:
    for _ in range(_MAX_POSITION_PASSES):
        try:
            json.loads(text)
            return text
        except RecursionError:
            return text
        except json.JSONDecodeError as e:
            if e.pos >= len(text.rstrip()):
                return text  # truncated, balancing closes it
            fixed = fix_position_specific_issue(text, e.pos, e.msg)
        if fixed == text:
            return text
        text = fixed
    return text


# ---------- balancing ----------
def _trim_dangling_tail(body: str, top: str) -> str:
    """Remove what cannot precede a closer: a trailing comma, `"key":`, or a bare key."""
    body = body.rstrip()
    while True:
        previous = body
        if body.endswith(","):
            body = body[:-1].rstrip()
        elif body.endswith(":"):
            m = _DANGLING_PAIR.search(body)
            body = (body[:m.start()] if m else body[:-1]).rstrip()
        elif top == "{":
            m = _DANGLING_KEY.search(body)
            if m:
                body = (body[:m.start(1) + 1] if m.group(1) == "{" else body[:m.start()]).rstrip()
        if body == previous:
            return body


@_repair_step
def balance_brackets_and_braces(text: str) -> str:
    """Close a dangling string, drop unmatched closers, then close open containers in reverse order."""
    out: List[str] = []
    stack: List[str] = []
    in_string = escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append(ch)
        elif ch in "}]":
            opener = _OPENER[ch]
            if opener not in stack:
                continue
            while stack[-1] != opener:
                out.append(_CLOSER[stack.pop()])
            stack.pop()
        out.append(ch)
    if in_string:
        if escaped:
            out.pop()
        out.append('"')
    body = "".join(out)
    if not stack:
        return body
    body = _trim_dangling_tail(body, stack[-1])
    return body + "".join(_CLOSER[o] for o in reversed(stack))


# ---------- driver ----------
def _slice_payload(text: str) -> str:
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if not starts:
        return text.strip()
    start = min(starts)
    end = max(text.rfind("}"), text.rfind("]"))
    if end > start and not re.search(r'[{}\[\]",:]', text[end + 1:]):
        return text[start:end + 1]
    return text[start:].rstrip()


def repair_json(text: str) -> str:
    """Return text that is more likely to parse. Already-valid JSON comes back unchanged."""
    if not isinstance(text, str):
        return "{}"
    if _parses(text):
        return text
    candidate = _slice_payload(strip_code_fences(text))
    candidate = light_repair(candidate)
    candidate = _fix_positions(candidate)
    candidate = balance_brackets_and_braces(candidate)
    if not _parses(candidate):
        # balancing can expose errors the first position pass stopped short of
        candidate = balance_brackets_and_braces(_fix_positions(candidate))
    return candidate


def extract_json_from_text(text: str) -> Any:
    """Parse the outermost `{...}` or `[...]` embedded in prose; None if it does not parse."""
    if not isinstance(text, str):
        return None
    starts = [(text.find(opener), opener) for opener in "{[" if opener in text]
    if not starts:
        return None
    # only the container that opens first; an inner array is not the payload
    start, opener = min(starts)
    end = text.rfind(_CLOSER[opener])
    if end <= start:
        return None
    fragment = text[start:end + 1]
    for attempt in (fragment, light_repair(fragment)):
        try:
            return json.loads(attempt)
        except (ValueError, RecursionError):
            continue
    return None


class _Layout:
    """Where each container of a text closes, and the nesting depth at every offset."""

    def __init__(self, text: str):
        self.depth = [0] * (len(text) + 1)
        self.closes: Dict[int, int] = {}
        stack: List[Tuple[str, int]] = []
        in_string = escaped = False
        for i, ch in enumerate(text):
            self.depth[i] = len(stack)
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
            elif ch == '"':
                in_string = True
            elif ch in "{[":
                stack.append((ch, i))
            elif ch in "}]" and any(o == _OPENER[ch] for o, _ in stack):
                while True:
                    opener, start = stack.pop()
                    if opener == _OPENER[ch]:
                        self.closes[start] = i
                        break
        self.depth[len(text)] = len(stack)


def _sibling_ends(layout: _Layout, keys: List[Any], default: int) -> List[int]:
    """For each key match, the start of the next key at the same depth or shallower."""
    ends = [default] * len(keys)
    pending: List[int] = []
    for j, m in enumerate(keys):
        level = layout.depth[m.start()]
        while pending and layout.depth[keys[pending[-1]].start()] >= level:
            ends[pending.pop()] = m.start()
        pending.append(j)
    return ends


def _decode_fragment(text: str, pos: int, end: int, budget: List[int]) -> Tuple[Any, int]:
    """
    Decode the value at `pos`, looking no further than `end`. A container that
    does not decode as-is is repaired on its own; `budget` caps the characters
    spent on repairs across the whole scan.
    """
    fragment = text[pos:end]
    try:
        value, size = _DECODER.raw_decode(fragment)
        return value, pos + size
    except (ValueError, RecursionError):
        pass
    if fragment[:1] in ("{", "[") and budget[0] >= len(fragment):
        budget[0] -= len(fragment)
        try:
            value, _ = _DECODER.raw_decode(balance_brackets_and_braces(light_repair(fragment)))
            return value, end
        except (ValueError, RecursionError):
            pass
    return _MISSING, pos


def extract_valid_json_subset(text: str) -> Optional[Dict[str, Any]]:
    """
    Last resort: salvage `"key": value` fragments that parse on their own
    (e.g. a complete `"skills": {...}` inside otherwise broken output).
    Keys whose value cannot be recovered get an empty value of the opened
    type: [] for arrays, {} for objects, "" for strings.

    Each value is read only up to its own closer or, when it never closes, up
    to the next key at its depth, so the scan stays linear in the input.
    """
    if not isinstance(text, str):
        return None
    layout = _Layout(text)
    keys = list(_SUBSET_KEY.finditer(text))
    ends = _sibling_ends(layout, keys, len(text))
    budget = [max(_SUBSET_MIN_BUDGET, _SUBSET_BUDGET_FACTOR * len(text))]
    result: Dict[str, Any] = {}
    consumed = 0
    for m, sibling in zip(keys, ends):
        key, pos = m.group(1), m.end()
        if m.start() < consumed or key in result:
            continue
        end = layout.closes[pos] + 1 if pos in layout.closes else sibling
        value, stop = _decode_fragment(text, pos, end, budget)
        if value is _MISSING:
            empty = {"[": list, "{": dict, '"': str}.get(text[pos:pos + 1])
            if empty is not None:
                result[key] = empty()
            continue
        result[key] = value
        consumed = stop
    return result or None


def _parse_direct(text: str) -> Any:
    return json.loads(text)


def _parse_repaired(text: str) -> Any:
    # bare prose can "repair" into a JSON string; only containers count
    value = json.loads(repair_json(text))
    return value if isinstance(value, (dict, list)) else None


_STRATEGIES = (
    ("direct", _parse_direct),
    ("extract", extract_json_from_text),
    ("repair", _parse_repaired),
    ("subset", extract_valid_json_subset),
)


def safe_parse_json(text: str, fallback: Any = None) -> Any:
    """Parse LLM output with every strategy in turn; returns `fallback` when all fail. Never raises."""
    if not isinstance(text, str):
        return fallback
    for name, strategy in _STRATEGIES:
        try:
            value = strategy(text)
        except Exception as e:
            logger.debug("[repair] %s failed: %s: %s", name, type(e).__name__, e)
            continue
        if value is not None:
            if name != "direct":
                logger.debug("[repair] recovered JSON via %s", name)
            return value
    logger.debug("[repair] all strategies failed, using fallback")
    return fallback
