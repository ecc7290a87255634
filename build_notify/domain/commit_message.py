# build_notify/domain/commit_message.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CommitMessage(BaseModel):
    """
    커밋 메시지 도메인 모델.

    - raw: CI 가 넘겨준 원본 메시지
    - title: 첫 줄
    - body: 나머지 (제목 바로 뒤의 빈 줄 하나만 제거)
    """

    model_config = ConfigDict(frozen=True)

    raw: str = ""
    title: str = ""
    body: str = ""

    @classmethod
    def parse(cls, raw: str) -> "CommitMessage":
        """
        원본 메시지를 title / body 로 나눈다.

        "Title\\n\\nBody" 처럼 두번째 줄이 비어 있으면 그 한 줄만 버린다.
        그 뒤의 빈 줄은 그대로 body 에 남는다.
        """
        if not raw:
            return cls()

        title, sep, body = raw.partition("\n")
        if not sep:
            return cls(raw=raw, title=raw, body="")

        if body.startswith("\n"):
            body = body[1:]

        return cls(raw=raw, title=title, body=body)

    def __str__(self) -> str:
        return self.raw


def parse_commit_message(raw: str) -> CommitMessage:
    return CommitMessage.parse(raw)
