# build_notify/adapters/drone_env.py
"""
Drone CI 환경 변수 → 도메인 모델 변환
"""
from __future__ import annotations

from typing import Mapping

from build_notify.domain.build import Author, Build, NotificationConfig, Plugin, Repo
from build_notify.domain.errors import ConfigError


def _get(env: Mapping[str, str], *names: str) -> str:
    """names 중 처음으로 값이 있는 변수를 돌려준다"""
    for name in names:
        value = env.get(name)
        if value:
            return value
    return ""


def _get_int(env: Mapping[str, str], name: str) -> int:
    value = env.get(name, "").strip()
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _get_bool(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def load_repo(env: Mapping[str, str]) -> Repo:
    return Repo(
        owner=_get(env, "DRONE_REPO_OWNER"),
        name=_get(env, "DRONE_REPO_NAME"),
    )


def load_build(env: Mapping[str, str]) -> Build:
    return Build(
        tag=_get(env, "DRONE_TAG"),
        event=_get(env, "DRONE_BUILD_EVENT"),
        number=_get_int(env, "DRONE_BUILD_NUMBER"),
        commit=_get(env, "DRONE_COMMIT_SHA"),
        ref=_get(env, "DRONE_COMMIT_REF"),
        branch=_get(env, "DRONE_COMMIT_BRANCH"),
        author=Author(
            username=_get(env, "DRONE_COMMIT_AUTHOR"),
            name=_get(env, "DRONE_COMMIT_AUTHOR_NAME"),
            email=_get(env, "DRONE_COMMIT_AUTHOR_EMAIL"),
            avatar=_get(env, "DRONE_COMMIT_AUTHOR_AVATAR"),
        ),
        pull=_get(env, "DRONE_PULL_REQUEST"),
        message=_get(env, "DRONE_COMMIT_MESSAGE"),
        deploy_to=_get(env, "DRONE_DEPLOY_TO"),
        status=_get(env, "DRONE_BUILD_STATUS"),
        link=_get(env, "DRONE_BUILD_LINK"),
        started=_get_int(env, "DRONE_BUILD_STARTED"),
        created=_get_int(env, "DRONE_BUILD_CREATED"),
    )


def load_config(env: Mapping[str, str]) -> NotificationConfig:
    return NotificationConfig(
        webhook=_get(env, "PLUGIN_WEBHOOK", "SLACK_WEBHOOK"),
        channel=_get(env, "PLUGIN_CHANNEL"),
        recipient=_get(env, "PLUGIN_RECIPIENT"),
        username=_get(env, "PLUGIN_USERNAME"),
        icon_url=_get(env, "PLUGIN_ICON_URL"),
        icon_emoji=_get(env, "PLUGIN_ICON_EMOJI"),
        color=_get(env, "PLUGIN_COLOR"),
        image_url=_get(env, "PLUGIN_IMAGE_URL"),
        link_names=_get_bool(env, "PLUGIN_LINK_NAMES"),
        template=_get(env, "PLUGIN_TEMPLATE"),
        fallback=_get(env, "PLUGIN_FALLBACK"),
        fields_template=_get(env, "PLUGIN_FIELDS_TEMPLATE"),
    )


def load_plugin(env: Mapping[str, str]) -> Plugin:
    """
    환경 변수 매핑으로부터 Plugin 을 만든다.

    Raises:
        ConfigError: webhook 이 없거나 숫자 변수가 정수가 아닌 경우
    """
    config = load_config(env)
    if not config.webhook:
        raise ConfigError("PLUGIN_WEBHOOK is not set")

    return Plugin(repo=load_repo(env), build=load_build(env), config=config)
