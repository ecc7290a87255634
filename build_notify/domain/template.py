# build_notify/domain/template.py
"""
알림 메시지 템플릿 엔진

handlebars 문법의 일부만 지원한다.

    {{build.status}}                  field 치환 (HTML escape 없음)
    {{{build.message}}}               field 치환 ({{ }} 와 동일)
    {{truncate build.commit 8}}       helper 호출
    {{#success build.status}} .. {{else}} .. {{/success}}
    {{! comment }}

field path 와 helper 는 아래 테이블에 등록된 것만 사용할 수 있다.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import re
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict

from build_notify.domain.build import Build, Plugin, Repo
from build_notify.domain.errors import (
    TemplateFieldError,
    TemplateHelperError,
    TemplateParseError,
)

SHORT_COMMIT_LENGTH = 8
DEFAULT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_ARG_RE = re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'|[^\s"\']+')
_INT_RE = re.compile(r"-?\d+$")
_PATH_RE = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*$")
_NAME_RE = re.compile(r"[A-Za-z_]\w*$")
# tag 안쪽: 따옴표 문자열 안의 '}}' 는 닫는 괄호로 보지 않는다
_TAG_BODY_RE = re.compile(r'(?:"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'|[^"\'}]|\}(?!\}))*')


class RenderContext(BaseModel):
    """템플릿에 노출되는 읽기 전용 데이터 (repo, build)"""

    model_config = ConfigDict(frozen=True)

    repo: Repo
    build: Build

    @classmethod
    def from_plugin(cls, plugin: Plugin) -> "RenderContext":
        return cls(repo=plugin.repo, build=plugin.build)


# --- field 테이블 ------------------------------------------------------------

Accessor = Callable[[RenderContext], Any]

FIELDS: Dict[str, Accessor] = {
    "repo.owner": lambda ctx: ctx.repo.owner,
    "repo.name": lambda ctx: ctx.repo.name,
    "build.tag": lambda ctx: ctx.build.tag,
    "build.event": lambda ctx: ctx.build.event,
    "build.number": lambda ctx: ctx.build.number,
    "build.commit": lambda ctx: ctx.build.commit,
    "build.ref": lambda ctx: ctx.build.ref,
    "build.branch": lambda ctx: ctx.build.branch,
    "build.author": lambda ctx: ctx.build.author.username,
    "build.author.username": lambda ctx: ctx.build.author.username,
    "build.author.name": lambda ctx: ctx.build.author.name,
    "build.author.email": lambda ctx: ctx.build.author.email,
    "build.author.avatar": lambda ctx: ctx.build.author.avatar,
    "build.pull": lambda ctx: ctx.build.pull,
    "build.message": lambda ctx: ctx.build.message.raw,
    "build.message.title": lambda ctx: ctx.build.message.title,
    "build.message.body": lambda ctx: ctx.build.message.body,
    "build.deployTo": lambda ctx: ctx.build.deploy_to,
    "build.status": lambda ctx: ctx.build.status,
    "build.link": lambda ctx: ctx.build.link,
    "build.started": lambda ctx: ctx.build.started,
    "build.created": lambda ctx: ctx.build.created,
}


# --- helper 테이블 -----------------------------------------------------------

def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_int(value: Any, helper: str) -> int:
    if isinstance(value, bool):
        raise TemplateHelperError(f"{helper}: expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise TemplateHelperError(f"{helper}: expected an integer, got {value!r}") from None


def truncate(value: Any, length: Any = SHORT_COMMIT_LENGTH) -> str:
    """앞에서부터 length 글자만 남긴다. 기본값 8 = short commit"""
    return _as_text(value)[: max(_as_int(length, "truncate"), 0)]


def uppercase(value: Any) -> str:
    return _as_text(value).upper()


def lowercase(value: Any) -> str:
    return _as_text(value).lower()


def uppercasefirst(value: Any) -> str:
    text = _as_text(value)
    return text[:1].upper() + text[1:]


def format_datetime(
    timestamp: Any,
    fmt: Any = DEFAULT_DATETIME_FORMAT,
    zone: Any = "UTC",
) -> str:
    """
    unix timestamp(초)를 strftime 포맷으로 변환한다.

    현재 시각은 사용하지 않는다 (ctx 에 들어있는 값만 사용).
    """
    seconds = _as_int(timestamp, "datetime")
    zone_name = _as_text(zone)
    if zone_name.upper() == "UTC":
        tz = timezone.utc
    else:
        try:
            tz = ZoneInfo(zone_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise TemplateHelperError(f"datetime: unknown time zone {zone_name!r}") from None
    try:
        moment = datetime.fromtimestamp(seconds, tz)
    except (OverflowError, OSError, ValueError):
        raise TemplateHelperError(f"datetime: timestamp out of range {seconds!r}") from None
    return moment.strftime(_as_text(fmt))


def _is_success(status: Any) -> bool:
    return _as_text(status) == "success"


def _is_failure(status: Any) -> bool:
    return _as_text(status) == "failure"


def _is_truthy(value: Any) -> bool:
    return bool(value)


@dataclass(frozen=True)
class Helper:
    func: Callable[..., Any]
    min_args: int
    max_args: int
    block: bool = False


HELPERS: Dict[str, Helper] = {
    "truncate": Helper(truncate, 1, 2),
    "uppercase": Helper(uppercase, 1, 1),
    "lowercase": Helper(lowercase, 1, 1),
    "uppercasefirst": Helper(uppercasefirst, 1, 1),
    "datetime": Helper(format_datetime, 1, 3),
    "success": Helper(_is_success, 1, 1, block=True),
    "failure": Helper(_is_failure, 1, 1, block=True),
    "if": Helper(_is_truthy, 1, 1, block=True),
}


# --- AST ---------------------------------------------------------------------

@dataclass(frozen=True)
class _Literal:
    value: Union[str, int]


@dataclass(frozen=True)
class _Field:
    path: str
    accessor: Accessor


Arg = Union[_Literal, _Field]


@dataclass(frozen=True)
class _Text:
    text: str


@dataclass(frozen=True)
class _Value:
    arg: Arg


@dataclass(frozen=True)
class _Call:
    name: str
    helper: Helper
    args: Tuple[Arg, ...]


@dataclass(frozen=True)
class _Block:
    name: str
    helper: Helper
    args: Tuple[Arg, ...]
    body: Tuple["Node", ...]
    inverse: Tuple["Node", ...]


Node = Union[_Text, _Value, _Call, _Block]


# --- Tokenizer / Parser -----------------------------------------------------

def _tokenize(text: str):
    """
    (kind, value, offset) 튜플을 순서대로 돌려준다.

    kind: "text" 또는 "tag" (tag 의 value 는 {{ }} 안쪽 문자열)
    """
    pos = 0
    while True:
        start = text.find("{{", pos)
        if start < 0:
            if pos < len(text):
                yield "text", text[pos:], pos
            return

        if start > pos:
            yield "text", text[pos:start], pos

        close = "}}}" if text.startswith("{{{", start) else "}}"
        inner_start = start + len(close)
        end = _TAG_BODY_RE.match(text, inner_start).end()
        if not text.startswith(close, end):
            # 닫히지 않은 따옴표: _split_tag 에서 malformed 로 처리
            end = text.find(close, inner_start)
        if end < 0:
            raise TemplateParseError("unclosed tag", start)

        yield "tag", text[inner_start:end].strip(), start
        pos = end + len(close)


def _split_tag(inner: str, position: int) -> List[str]:
    parts: List[str] = []
    pos = 0
    while pos < len(inner):
        if inner[pos].isspace():
            pos += 1
            continue
        m = _ARG_RE.match(inner, pos)
        if m is None:
            raise TemplateParseError(f"malformed tag {inner!r}", position)
        parts.append(m.group(0))
        pos = m.end()
    return parts


def _parse_arg(token: str, position: int) -> Arg:
    if token[0] in "\"'":
        return _Literal(re.sub(r"\\(.)", r"\1", token[1:-1]))
    if _INT_RE.match(token):
        return _Literal(int(token))
    if not _PATH_RE.match(token):
        raise TemplateParseError(f"invalid field reference {token!r}", position)

    accessor = FIELDS.get(token)
    if accessor is None:
        raise TemplateFieldError(token)
    return _Field(token, accessor)


def _lookup_helper(name: str, args: List[str], position: int, block: bool) -> Helper:
    helper = HELPERS.get(name)
    if helper is None or helper.block != block:
        kind = "block helper" if block else "helper"
        raise TemplateParseError(f"unknown {kind} {name!r}", position)
    if not helper.min_args <= len(args) <= helper.max_args:
        raise TemplateParseError(
            f"{name} expects {helper.min_args}..{helper.max_args} arguments, got {len(args)}",
            position,
        )
    return helper


class _Frame:
    """열려 있는 block 하나"""

    def __init__(self, name: str, helper: Helper, args: Tuple[Arg, ...], position: int):
        self.name = name
        self.helper = helper
        self.args = args
        self.position = position
        self.body: List[Node] = []
        self.inverse: Optional[List[Node]] = None

    @property
    def nodes(self) -> List[Node]:
        return self.inverse if self.inverse is not None else self.body

    def close(self) -> _Block:
        return _Block(
            name=self.name,
            helper=self.helper,
            args=self.args,
            body=tuple(self.body),
            inverse=tuple(self.inverse or ()),
        )


class Template:
    """
    파싱이 끝난 템플릿.

    불변 객체라서 한 번 파싱해두고 여러 context 로 render 해도 된다.
    """

    def __init__(self, nodes: Tuple[Node, ...]):
        self._nodes = nodes

    def render(self, ctx: RenderContext) -> str:
        out: List[str] = []
        self._render_nodes(self._nodes, ctx, out)
        return "".join(out)

    def _render_nodes(self, nodes: Tuple[Node, ...], ctx: RenderContext, out: List[str]) -> None:
        for node in nodes:
            if isinstance(node, _Text):
                out.append(node.text)
            elif isinstance(node, _Value):
                out.append(_as_text(_resolve(node.arg, ctx)))
            elif isinstance(node, _Call):
                values = [_resolve(arg, ctx) for arg in node.args]
                out.append(_as_text(node.helper.func(*values)))
            else:
                values = [_resolve(arg, ctx) for arg in node.args]
                branch = node.body if node.helper.func(*values) else node.inverse
                self._render_nodes(branch, ctx, out)


def _resolve(arg: Arg, ctx: RenderContext) -> Any:
    if isinstance(arg, _Literal):
        return arg.value
    return arg.accessor(ctx)


def parse_template(text: str) -> Template:
    """
    템플릿 문자열을 파싱한다.

    Raises:
        TemplateParseError: 문법 오류
        TemplateFieldError: 등록되지 않은 field path 참조
    """
    root: List[Node] = []
    stack: List[_Frame] = []

    def current() -> List[Node]:
        return stack[-1].nodes if stack else root

    for kind, value, position in _tokenize(text):
        if kind == "text":
            current().append(_Text(value))
            continue

        if not value:
            raise TemplateParseError("empty tag", position)

        if value.startswith("!"):
            continue

        if value.startswith("#"):
            parts = _split_tag(value[1:], position)
            if not parts or not _NAME_RE.match(parts[0]):
                raise TemplateParseError("block without helper name", position)
            name, raw_args = parts[0], parts[1:]
            helper = _lookup_helper(name, raw_args, position, block=True)
            args = tuple(_parse_arg(token, position) for token in raw_args)
            stack.append(_Frame(name, helper, args, position))
            continue

        if value.startswith("/"):
            name = value[1:].strip()
            if not stack:
                raise TemplateParseError(f"unexpected closing tag {name!r}", position)
            if stack[-1].name != name:
                raise TemplateParseError(
                    f"closing tag {name!r} does not match {stack[-1].name!r}",
                    position,
                )
            block = stack.pop().close()
            current().append(block)
            continue

        if value == "else":
            if not stack:
                raise TemplateParseError("'else' outside of a block", position)
            if stack[-1].inverse is not None:
                raise TemplateParseError("duplicate 'else' in block", position)
            stack[-1].inverse = []
            continue

        parts = _split_tag(value, position)
        name = parts[0]
        if len(parts) > 1 or name in HELPERS:
            helper = _lookup_helper(name, parts[1:], position, block=False)
            args = tuple(_parse_arg(token, position) for token in parts[1:])
            current().append(_Call(name, helper, args))
        else:
            current().append(_Value(_parse_arg(name, position)))

    if stack:
        frame = stack[-1]
        raise TemplateParseError(f"unclosed block {frame.name!r}", frame.position)

    return Template(tuple(root))


def render(template_text: str, ctx: RenderContext) -> str:
    """template_text 를 ctx 로 렌더링한다. 실패 시 TemplateError 계열 예외"""
    return parse_template(template_text).render(ctx)
