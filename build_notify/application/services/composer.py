# build_notify/application/services/composer.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from build_notify.domain.build import Build, Plugin, Repo
from build_notify.domain.template import RenderContext, render, truncate


class ComposedMessage(BaseModel):
    """
    Composer 결과물.

    - message: 본문 (Slack mrkdwn)
    - fallback: markup 없는 plain text
    - fields_json: [{title, short, value}, ...] JSON 텍스트. 템플릿이 없으면 ""
    """

    model_config = ConfigDict(frozen=True)

    message: str
    fallback: str
    fields_json: str = ""


def default_message(repo: Repo, build: Build) -> str:
    """
    기본 본문.

    ex) *success* <http://github.com/octocat/hello-world|octocat/hello-world#7fd1a60b> (master) by octocat
    """
    return (
        f"*{build.status}* <{build.link}|{repo.owner}/{repo.name}#{truncate(build.commit)}> "
        f"({build.branch}) by {build.author.username}"
    )


def default_fallback(repo: Repo, build: Build) -> str:
    """
    기본 fallback.

    ex) success octocat/hello-world#7fd1a60b (master) by octocat
    """
    return (
        f"{build.status} {repo.owner}/{repo.name}#{truncate(build.commit)} "
        f"({build.branch}) by {build.author.username}"
    )


def template_message(template_text: str, plugin: Plugin) -> str:
    return render(template_text, RenderContext.from_plugin(plugin))


def compose(plugin: Plugin) -> ComposedMessage:
    """
    message / fallback / fields 를 만든다.

    각 항목은 설정에 템플릿이 있으면 템플릿 결과를 그대로 쓰고,
    없으면 기본 포맷을 쓴다. 템플릿 렌더링 실패는 그대로 올라간다.
    """
    repo, build, config = plugin.repo, plugin.build, plugin.config

    if config.template:
        message = template_message(config.template, plugin)
    else:
        message = default_message(repo, build)

    if config.fallback:
        fallback = template_message(config.fallback, plugin)
    else:
        fallback = default_fallback(repo, build)

    fields_json = ""
    if config.fields_template:
        fields_json = template_message(config.fields_template, plugin)

    return ComposedMessage(message=message, fallback=fallback, fields_json=fields_json)
