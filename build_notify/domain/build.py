# build_notify/domain/build.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from build_notify.domain.commit_message import CommitMessage


class Author(BaseModel):
    """커밋 작성자 (CI 환경에서 받은 스냅샷)"""

    model_config = ConfigDict(frozen=True)

    username: str = ""
    name: str = ""
    email: str = ""
    avatar: str = ""


class Repo(BaseModel):
    """저장소 정보. ex) octocat/hello-world"""

    model_config = ConfigDict(frozen=True)

    owner: str = ""
    name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class Build(BaseModel):
    """
    CI 빌드 1회 실행 도메인 모델.

    started / created 는 unix timestamp (초).
    message 에 문자열을 넘기면 CommitMessage 로 파싱된다.
    """

    model_config = ConfigDict(frozen=True)

    tag: str = ""
    event: str = ""
    number: int = 0
    commit: str = ""
    ref: str = ""
    branch: str = ""
    author: Author = Field(default_factory=Author)
    pull: str = ""
    message: CommitMessage = Field(default_factory=CommitMessage)
    deploy_to: str = ""
    status: str = ""
    link: str = ""
    started: int = 0
    created: int = 0

    @field_validator("message", mode="before")
    @classmethod
    def parse_raw_message(cls, v: Any) -> Any:
        if isinstance(v, str):
            return CommitMessage.parse(v)
        return v


class NotificationConfig(BaseModel):
    """
    알림 설정.

    template / fallback / fields_template 이 비어 있으면 기본 포맷을 사용한다.
    """

    model_config = ConfigDict(frozen=True)

    webhook: str = ""
    channel: str = ""
    recipient: str = ""
    username: str = ""
    icon_url: str = ""
    icon_emoji: str = ""
    color: str = ""
    image_url: str = ""
    link_names: bool = False

    template: str = ""
    fallback: str = ""
    fields_template: str = ""


class Plugin(BaseModel):
    """알림 1건을 만드는 데 필요한 입력 묶음"""

    model_config = ConfigDict(frozen=True)

    repo: Repo = Field(default_factory=Repo)
    build: Build = Field(default_factory=Build)
    config: NotificationConfig = Field(default_factory=NotificationConfig)
